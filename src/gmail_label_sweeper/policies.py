"""The static label -> disposition table."""

from __future__ import annotations

from .models import ActionPolicy, Operation

# label_name must match the Gmail label exactly, including nesting.
ACTIONS: list[ActionPolicy] = [
    ActionPolicy(
        key="ThreeDayArchive",
        label_name="Automations/ThreeDayArchive",
        age_threshold_days=3,
        operation=Operation.ARCHIVE,
    ),
    ActionPolicy(
        key="SevenDayArchive",
        label_name="Automations/SevenDayArchive",
        age_threshold_days=7,
        operation=Operation.ARCHIVE,
    ),
    ActionPolicy(
        key="ThreeDayDelete",
        label_name="Automations/ThreeDayDelete",
        age_threshold_days=3,
        operation=Operation.TRASH,
    ),
]


def validate_policies(policies: list[ActionPolicy]) -> list[ActionPolicy]:
    """Check the table once at startup.

    Raises ValueError on duplicate keys, empty label names, negative
    thresholds or an unknown operation. Label-name uniqueness is not
    enforced.
    """
    seen: set[str] = set()
    for policy in policies:
        if not policy.key:
            raise ValueError("Action policy key must not be empty")
        if policy.key in seen:
            raise ValueError(f"Duplicate action policy key: {policy.key}")
        seen.add(policy.key)

        if not policy.label_name:
            raise ValueError(f"Action policy {policy.key} has no label name")
        if not isinstance(policy.age_threshold_days, int) or policy.age_threshold_days < 0:
            raise ValueError(
                f"Action policy {policy.key} has invalid age threshold: {policy.age_threshold_days!r}"
            )
        if not isinstance(policy.operation, Operation):
            raise ValueError(
                f"Action policy {policy.key} has unknown operation: {policy.operation!r}"
            )
    return policies
