"""Bounded run ledger shared by the daily and weekly jobs.

The ledger is a JSON array of run records held in a single store property.
Every daily step appends one record; the weekly summary reads everything
and then resets it.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from .constants import MAX_RUNS_TO_KEEP, RUNS_PROPERTY_KEY
from .models import RunRecord, utc_timestamp

logger = logging.getLogger(__name__)


def _load_raw(store) -> list[dict]:
    raw = store.get(RUNS_PROPERTY_KEY)
    if not raw:
        return []
    try:
        runs = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored run ledger is not valid JSON; starting from an empty ledger")
        return []
    if not isinstance(runs, list):
        logger.warning("Stored run ledger is not a list; starting from an empty ledger")
        return []
    return runs


def load_runs(store) -> list[RunRecord]:
    """Return every stored run record, oldest first.

    A missing or unreadable ledger reads as empty. A record without an
    action key raises KeyError.
    """
    return [RunRecord.from_dict(r) for r in _load_raw(store)]


def record_run(
    store,
    action_key: str,
    fields: dict,
    max_runs: int = MAX_RUNS_TO_KEEP,
    now: datetime | None = None,
) -> RunRecord:
    """Append one run record and trim the ledger to ``max_runs`` entries.

    Missing counts default to 0 and a missing error to "". The oldest
    records are evicted first.
    """
    runs = _load_raw(store)

    record = RunRecord(
        action_key=action_key,
        label_name=fields.get("label_name") or "",
        age_threshold_days=fields.get("age_threshold_days") or 0,
        operation=fields.get("operation") or "",
        scanned=fields.get("scanned") or 0,
        acted=fields.get("acted") or 0,
        error=fields.get("error") or "",
        when=utc_timestamp(now),
    )
    runs.append(record.to_dict())

    if len(runs) > max_runs:
        logger.debug("Evicting %d oldest run record(s)", len(runs) - max_runs)
        del runs[: len(runs) - max_runs]

    store.set(RUNS_PROPERTY_KEY, json.dumps(runs))
    return record


def reset_runs(store) -> None:
    """Clear the ledger."""
    store.delete(RUNS_PROPERTY_KEY)
