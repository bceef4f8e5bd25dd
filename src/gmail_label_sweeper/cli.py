"""CLI entry point for Gmail Label Sweeper.

Meant to be driven by a scheduler, e.g. cron:

    15 4 * * *  gmail-label-sweeper daily
    30 7 * * 1  gmail-label-sweeper weekly
"""

from __future__ import annotations

from pathlib import Path

import click

from .auth import check_auth, get_gmail_service
from .constants import SUMMARY_TO_ENVVAR
from .display import console, display_report, display_runs, setup_logging
from .gmail_client import GmailMailbox
from .jobs import run_daily, run_weekly
from .ledger import load_runs, reset_runs
from .policies import ACTIONS, validate_policies
from .store import PropertyStore

_db_option = click.option(
    "--db",
    "db_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Ledger database (default ~/.gmail-label-sweeper/ledger.db).",
)


def _mailbox() -> GmailMailbox:
    try:
        validate_policies(ACTIONS)
    except ValueError as e:
        raise click.ClickException(f"Invalid action table: {e}") from e
    try:
        service = get_gmail_service()
    except (FileNotFoundError, PermissionError) as e:
        raise click.ClickException(str(e)) from e
    return GmailMailbox(service)


@click.group()
@click.version_option(version="0.1.0", prog_name="gmail-label-sweeper")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Gmail Label Sweeper - archive or trash labelled threads once they go stale."""
    setup_logging(verbose)


@cli.command()
@_db_option
def daily(db_path: Path | None) -> None:
    """Apply every label policy and record the outcome."""
    mailbox = _mailbox()

    with PropertyStore(db_path=db_path) as store:
        records = run_daily(mailbox, store, ACTIONS)

    display_runs(records, title="Daily Run")


@cli.command()
@click.option(
    "--to",
    "recipient",
    default=None,
    envvar=SUMMARY_TO_ENVVAR,
    help=f"Summary recipient (env {SUMMARY_TO_ENVVAR}; default: the authenticated account).",
)
@_db_option
def weekly(recipient: str | None, db_path: Path | None) -> None:
    """Email the summary of recorded runs and clear the ledger."""
    mailbox = _mailbox()
    recipient = recipient or mailbox.get_profile_email()

    with PropertyStore(db_path=db_path) as store:
        body = run_weekly(store, mailbox, recipient, ACTIONS)

    display_report(body, recipient)


@cli.command()
def auth() -> None:
    """Run the OAuth flow and test Gmail access."""
    email = check_auth()
    if email is None:
        raise click.ClickException("Authentication failed.")
    console.print(f"[green]Authenticated as {email}[/green]")


@cli.group(name="ledger")
def ledger_group() -> None:
    """Inspect or reset the run ledger."""


@ledger_group.command(name="show")
@_db_option
def ledger_show(db_path: Path | None) -> None:
    """List the runs recorded since the last weekly summary."""
    with PropertyStore(db_path=db_path) as store:
        records = load_runs(store)

    if not records:
        console.print("[dim]Ledger is empty.[/dim]")
        return

    display_runs(records)


@ledger_group.command(name="info")
@_db_option
def ledger_info(db_path: Path | None) -> None:
    """Show ledger database statistics."""
    with PropertyStore(db_path=db_path) as store:
        info = store.get_info()
        run_count = len(load_runs(store))

    console.print(f"[bold]Database:[/bold] {info['db_path']}")
    console.print(f"[bold]Database size:[/bold] {info['db_file_size'] / 1024:.1f} KB")
    console.print(f"[bold]Last update:[/bold] {info['last_update'] or 'never'}")
    console.print(f"[bold]Recorded runs:[/bold] {run_count}")


@ledger_group.command(name="clear")
@_db_option
def ledger_clear(db_path: Path | None) -> None:
    """Discard recorded runs without sending a summary."""
    with PropertyStore(db_path=db_path) as store:
        reset_runs(store)
    console.print("[green]Ledger cleared.[/green]")
