"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gmail_label_sweeper.models import ActionPolicy, Label, Operation, ThreadMeta

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeMailbox:
    """In-memory mailbox: labels map to the threads carrying them."""

    def __init__(self) -> None:
        self.labels: dict[str, Label] = {}
        self.threads: dict[str, list[ThreadMeta]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[str] = set()

    def add_label(self, name: str, threads: list[ThreadMeta] | None = None) -> Label:
        label = Label(id=f"Label_{len(self.labels) + 1}", name=name)
        self.labels[name] = label
        self.threads[label.id] = list(threads or [])
        return label

    def get_label_by_name(self, name: str) -> Label | None:
        return self.labels.get(name)

    def get_threads(self, label: Label) -> list[ThreadMeta]:
        return list(self.threads[label.id])

    def _check(self, action: str, thread: ThreadMeta) -> None:
        if thread.thread_id in self.fail_on:
            raise RuntimeError(f"{action} failed for {thread.thread_id}")
        self.calls.append((action, thread.thread_id))

    def archive_thread(self, thread: ThreadMeta) -> None:
        self._check("archive", thread)

    def trash_thread(self, thread: ThreadMeta) -> None:
        self._check("trash", thread)

    def remove_label(self, thread: ThreadMeta, label: Label) -> None:
        self._check("unlabel", thread)
        self.threads[label.id] = [
            t for t in self.threads[label.id] if t.thread_id != thread.thread_id
        ]


class MemoryStore:
    """Dict-backed property store."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class FakeSender:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send_message(self, to: str, subject: str, body: str) -> None:
        self.sent.append((to, subject, body))


def thread(thread_id: str, days_old: float) -> ThreadMeta:
    return ThreadMeta(thread_id=thread_id, last_activity=NOW - timedelta(days=days_old))


@pytest.fixture
def mailbox() -> FakeMailbox:
    return FakeMailbox()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


@pytest.fixture
def archive_policy() -> ActionPolicy:
    return ActionPolicy(
        key="ThreeDayArchive",
        label_name="Automations/ThreeDayArchive",
        age_threshold_days=3,
        operation=Operation.ARCHIVE,
    )


@pytest.fixture
def trash_policy() -> ActionPolicy:
    return ActionPolicy(
        key="ThreeDayDelete",
        label_name="Automations/ThreeDayDelete",
        age_threshold_days=3,
        operation=Operation.TRASH,
    )


@pytest.fixture
def policies(archive_policy: ActionPolicy, trash_policy: ActionPolicy) -> list[ActionPolicy]:
    return [archive_policy, trash_policy]
