"""Scan one label and dispose of its stale threads."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from .models import ActionPolicy, LabelFailure, LabelResult, Operation

logger = logging.getLogger(__name__)


def error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def process_label(mailbox, policy: ActionPolicy, now: datetime) -> LabelResult | LabelFailure:
    """Archive or trash every labelled thread inactive since before the cutoff.

    The cutoff is ``now - age_threshold_days``; a thread is stale when its
    last activity is strictly earlier. Each stale thread gets the policy's
    operation and then loses the label, so later scans never select it
    again. Threads at or after the cutoff are left alone.

    Provider errors do not propagate. They are returned as a LabelFailure
    holding the counts reached before the error.
    """
    result = LabelResult()

    try:
        label = mailbox.get_label_by_name(policy.label_name)
        if label is None:
            logger.warning("[%s] label not found: %s", policy.key, policy.label_name)
            return LabelFailure(error=f"Label not found: {policy.label_name}")

        cutoff = now - timedelta(days=policy.age_threshold_days)
        threads = mailbox.get_threads(label)
        logger.info("[%s] threads with label: %d", policy.key, len(threads))

        for thread in threads:
            result.scanned += 1
            if thread.last_activity >= cutoff:
                continue

            if policy.operation is Operation.TRASH:
                mailbox.trash_thread(thread)
            else:
                mailbox.archive_thread(thread)
            mailbox.remove_label(thread, label)
            result.acted += 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("[%s] processing stopped after %d thread(s)", policy.key, result.scanned)
        return LabelFailure(
            error=error_message(exc),
            scanned=result.scanned,
            acted=result.acted,
        )

    logger.info(
        "[%s] scanned=%d, %s=%d", policy.key, result.scanned, policy.verb, result.acted
    )
    return result
