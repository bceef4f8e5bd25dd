"""Data models for Gmail Label Sweeper."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Operation(str, Enum):
    """Disposition applied to a stale thread."""

    ARCHIVE = "ARCHIVE"
    TRASH = "TRASH"


@dataclass(frozen=True)
class ActionPolicy:
    """One row of the label -> disposition table."""

    key: str
    label_name: str  # Exact, nested label name, e.g. "Automations/ThreeDayArchive"
    age_threshold_days: int
    operation: Operation

    @property
    def verb(self) -> str:
        return "trashed" if self.operation is Operation.TRASH else "archived"

    def snapshot(self) -> dict:
        """Policy fields copied onto every run record."""
        return {
            "label_name": self.label_name,
            "age_threshold_days": self.age_threshold_days,
            "operation": self.operation.value,
        }


@dataclass(frozen=True)
class Label:
    """A Gmail user label."""

    id: str
    name: str


@dataclass(frozen=True)
class ThreadMeta:
    """A labelled thread and the time of its newest message."""

    thread_id: str
    last_activity: datetime


@dataclass
class LabelResult:
    """Outcome of a label scan that ran to completion."""

    scanned: int = 0
    acted: int = 0


@dataclass
class LabelFailure:
    """Outcome of a label scan that stopped early.

    Counts reflect the work completed before the failure.
    """

    error: str
    scanned: int = 0
    acted: int = 0


def utc_timestamp(when: datetime | None = None) -> str:
    """Format a datetime as an ISO-8601 UTC string with a ``Z`` suffix."""
    when = when or datetime.now(timezone.utc)
    when = when.astimezone(timezone.utc)
    return when.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class RunRecord:
    """One ledger entry: the outcome of one policy during one daily run."""

    action_key: str
    label_name: str = ""
    age_threshold_days: int = 0
    operation: str = ""
    scanned: int = 0
    acted: int = 0
    error: str = ""
    when: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> RunRecord:
        return cls(
            action_key=data["action_key"],
            label_name=data.get("label_name") or "",
            age_threshold_days=data.get("age_threshold_days") or 0,
            operation=data.get("operation") or "",
            scanned=data.get("scanned") or 0,
            acted=data.get("acted") or 0,
            error=data.get("error") or "",
            when=data.get("when") or "",
        )


@dataclass
class ActionTotals:
    """Weekly running totals for a single policy key."""

    scanned: int = 0
    acted: int = 0
    errors: int = 0
