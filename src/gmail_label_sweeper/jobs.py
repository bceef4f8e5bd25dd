"""Scheduled jobs: the daily label sweep and the weekly summary."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .constants import MAX_RUNS_TO_KEEP, SUMMARY_SUBJECT
from .ledger import load_runs, record_run, reset_runs
from .models import ActionPolicy, LabelFailure, RunRecord
from .policies import ACTIONS
from .processor import error_message, process_label
from .report import render_report, summarize_runs

logger = logging.getLogger(__name__)


def run_daily(
    mailbox,
    store,
    policies: list[ActionPolicy] = ACTIONS,
    now: datetime | None = None,
    max_runs: int = MAX_RUNS_TO_KEEP,
) -> list[RunRecord]:
    """Process every policy in table order and record one run for each.

    A failing policy never stops the ones after it.
    """
    logger.info("Daily mailbox actions started (%d policies)", len(policies))
    now = now or datetime.now(timezone.utc)
    records: list[RunRecord] = []

    for policy in policies:
        fields = policy.snapshot()
        try:
            outcome = process_label(mailbox, policy, now)
        except Exception as exc:  # noqa: BLE001
            logger.exception("[%s] unexpected failure", policy.key)
            outcome = LabelFailure(error=error_message(exc))

        fields["scanned"] = outcome.scanned
        fields["acted"] = outcome.acted
        if isinstance(outcome, LabelFailure):
            fields["error"] = outcome.error

        records.append(record_run(store, policy.key, fields, max_runs=max_runs))

    return records


def run_weekly(
    store,
    sender,
    recipient: str,
    policies: list[ActionPolicy] = ACTIONS,
    now: datetime | None = None,
) -> str:
    """Email the totals accumulated since the last summary, then clear them.

    If sending raises, the ledger is kept so the next summary still covers
    those runs. Returns the report body.
    """
    runs = load_runs(store)
    totals = summarize_runs(runs, policies)
    body = render_report(policies, totals, now)

    sender.send_message(recipient, SUMMARY_SUBJECT, body)
    reset_runs(store)

    logger.info("Weekly summary of %d run(s) sent to %s", len(runs), recipient)
    return body
