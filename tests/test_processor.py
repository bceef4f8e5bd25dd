"""Tests for the label processor."""

from dataclasses import replace
from datetime import timedelta

from conftest import NOW, thread

from gmail_label_sweeper.models import LabelFailure, LabelResult, ThreadMeta
from gmail_label_sweeper.processor import process_label


def test_stale_threads_archived_and_unlabelled(mailbox, archive_policy):
    """Threads older than the cutoff are archived, then lose the label."""
    label = mailbox.add_label(
        archive_policy.label_name,
        [thread("old", 10), thread("new", 1)],
    )

    result = process_label(mailbox, archive_policy, NOW)

    assert isinstance(result, LabelResult)
    assert result.scanned == 2
    assert result.acted == 1
    assert mailbox.calls == [("archive", "old"), ("unlabel", "old")]
    assert [t.thread_id for t in mailbox.threads[label.id]] == ["new"]


def test_trash_policy_trashes(mailbox, trash_policy):
    mailbox.add_label(trash_policy.label_name, [thread("t1", 4)])

    result = process_label(mailbox, trash_policy, NOW)

    assert result.acted == 1
    assert mailbox.calls == [("trash", "t1"), ("unlabel", "t1")]


def test_thread_exactly_at_cutoff_is_kept(mailbox, archive_policy):
    """Staleness is strict: last activity == cutoff is not acted on."""
    at_cutoff = ThreadMeta(thread_id="edge", last_activity=NOW - timedelta(days=3))
    just_before = ThreadMeta(
        thread_id="older", last_activity=NOW - timedelta(days=3, seconds=1)
    )
    mailbox.add_label(archive_policy.label_name, [at_cutoff, just_before])

    result = process_label(mailbox, archive_policy, NOW)

    assert result.scanned == 2
    assert result.acted == 1
    assert ("archive", "edge") not in mailbox.calls
    assert ("archive", "older") in mailbox.calls


def test_second_run_is_idempotent(mailbox, archive_policy):
    """Acted threads are unlabelled, so a repeat scan acts on nothing."""
    mailbox.add_label(
        archive_policy.label_name,
        [thread("a", 5), thread("b", 6), thread("c", 0.5)],
    )

    first = process_label(mailbox, archive_policy, NOW)
    second = process_label(mailbox, archive_policy, NOW)

    assert first.acted == 2
    assert second.scanned == 1
    assert second.acted == 0


def test_label_not_found(mailbox, archive_policy):
    result = process_label(mailbox, archive_policy, NOW)

    assert isinstance(result, LabelFailure)
    assert result.scanned == 0
    assert result.acted == 0
    assert result.error == "Label not found: Automations/ThreeDayArchive"


def test_label_lookup_is_case_sensitive(mailbox, archive_policy):
    mailbox.add_label("automations/threedayarchive", [thread("x", 30)])

    result = process_label(mailbox, archive_policy, NOW)

    assert isinstance(result, LabelFailure)
    assert mailbox.calls == []


def test_zero_day_threshold(mailbox, archive_policy):
    """With a 0-day threshold anything older than now is stale."""
    policy = replace(archive_policy, age_threshold_days=0)
    mailbox.add_label(
        policy.label_name,
        [thread("past", 0.01), ThreadMeta(thread_id="now", last_activity=NOW)],
    )

    result = process_label(mailbox, policy, NOW)

    assert result.acted == 1
    assert ("archive", "past") in mailbox.calls


def test_failure_mid_scan_keeps_partial_counts(mailbox, archive_policy):
    """A provider error returns a failure with the work done so far."""
    mailbox.add_label(
        archive_policy.label_name,
        [thread("ok", 10), thread("bad", 10), thread("never", 10)],
    )
    mailbox.fail_on.add("bad")

    result = process_label(mailbox, archive_policy, NOW)

    assert isinstance(result, LabelFailure)
    assert result.error == "archive failed for bad"
    assert result.scanned == 2
    assert result.acted == 1
    assert ("archive", "never") not in mailbox.calls


def test_label_kept_when_disposition_fails(mailbox, trash_policy):
    """The label is only removed after the operation succeeds."""
    label = mailbox.add_label(trash_policy.label_name, [thread("bad", 10)])
    mailbox.fail_on.add("bad")

    process_label(mailbox, trash_policy, NOW)

    assert [t.thread_id for t in mailbox.threads[label.id]] == ["bad"]


def test_empty_label(mailbox, archive_policy):
    mailbox.add_label(archive_policy.label_name)

    result = process_label(mailbox, archive_policy, NOW)

    assert result == LabelResult(scanned=0, acted=0)
