"""Rich-based display functions for Gmail Label Sweeper."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .models import RunRecord

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route log records through the shared rich console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # googleapiclient logs every discovery/cache detail at INFO
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def display_runs(records: list[RunRecord], title: str = "Run Ledger") -> None:
    """Display run records oldest first; failed runs are highlighted."""
    table = Table(title=title)
    table.add_column("When", style="dim")
    table.add_column("Action")
    table.add_column("Label")
    table.add_column("Days", justify="right")
    table.add_column("Op")
    table.add_column("Scanned", justify="right")
    table.add_column("Acted", justify="right")
    table.add_column("Error")

    for r in records:
        color = "red" if r.error else "green"
        table.add_row(
            r.when,
            f"[{color}]{r.action_key}[/{color}]",
            r.label_name,
            str(r.age_threshold_days),
            r.operation,
            str(r.scanned),
            str(r.acted),
            f"[red]{r.error}[/red]" if r.error else "",
        )

    console.print(table)

    errors = sum(1 for r in records if r.error)
    console.print(
        Panel(
            f"Runs: {len(records)}  |  "
            f"Acted: {sum(r.acted for r in records)}  |  "
            f"Errors: {errors}",
            title="Summary",
        )
    )


def display_report(body: str, recipient: str) -> None:
    """Show the summary that was just emailed."""
    console.print(Panel(body, title=f"Sent to {recipient}"))
