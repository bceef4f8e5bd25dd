"""Weekly totals and the plain-text summary email."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .constants import SUMMARY_SUBJECT
from .models import ActionPolicy, ActionTotals, RunRecord

logger = logging.getLogger(__name__)


def summarize_runs(
    runs: list[RunRecord],
    policies: list[ActionPolicy],
) -> dict[str, ActionTotals]:
    """Fold run records into per-policy totals.

    Every configured key is present, even with no runs. A failed run adds
    one to ``errors`` and its partial counts are still summed.
    """
    totals = {p.key: ActionTotals() for p in policies}

    for run in runs:
        t = totals.get(run.action_key)
        if t is None:
            logger.warning("Skipping run for unknown action %r", run.action_key)
            continue
        t.scanned += run.scanned
        t.acted += run.acted
        if run.error:
            t.errors += 1

    return totals


def render_report(
    policies: list[ActionPolicy],
    totals: dict[str, ActionTotals],
    now: datetime | None = None,
) -> str:
    """Render the summary body, one line per policy in table order."""
    now = now or datetime.now(timezone.utc)

    lines = [
        SUMMARY_SUBJECT,
        f"Generated: {now.astimezone(timezone.utc):%Y-%m-%d %H:%M:%S} UTC",
        "",
    ]
    for policy in policies:
        t = totals[policy.key]
        lines.append(
            f"- {policy.key}: scanned={t.scanned}, {policy.verb}={t.acted}, errors={t.errors}"
        )

    return "\n".join(lines)
