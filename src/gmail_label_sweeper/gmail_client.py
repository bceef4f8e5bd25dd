"""Gmail API adapter: label lookup, labelled threads, dispositions and sending."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from email.message import EmailMessage

from googleapiclient.errors import HttpError

from gmail_label_sweeper.constants import BATCH_SIZE, PAGE_SIZE
from gmail_label_sweeper.models import Label, ThreadMeta

logger = logging.getLogger(__name__)


def _last_activity(thread: dict) -> datetime:
    """Return the newest message time of a thread resource as UTC."""
    newest_ms = max(
        (int(m.get("internalDate") or 0) for m in thread.get("messages", [])),
        default=0,
    )
    return datetime.fromtimestamp(newest_ms / 1000, tz=timezone.utc)


def _encode_message(to: str, subject: str, body: str) -> str:
    message = EmailMessage()
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body)
    return base64.urlsafe_b64encode(message.as_bytes()).decode()


class GmailMailbox:
    """Mailbox operations for the authenticated user ("me")."""

    def __init__(self, service) -> None:
        self.service = service

    # --- labels ---

    def list_labels(self) -> list[Label]:
        resp = self.service.users().labels().list(userId="me").execute()
        return [Label(id=item["id"], name=item["name"]) for item in resp.get("labels", [])]

    def get_label_by_name(self, name: str) -> Label | None:
        """Return the label whose name matches exactly, or None."""
        for label in self.list_labels():
            if label.name == name:
                return label
        return None

    # --- threads ---

    def list_thread_ids(self, label: Label) -> list[str]:
        """List every thread ID carrying the label, handling pagination."""
        ids: list[str] = []
        page_token: str | None = None

        while True:
            kwargs: dict = {
                "userId": "me",
                "labelIds": [label.id],
                "maxResults": PAGE_SIZE,
                "fields": "threads/id,nextPageToken",
            }
            if page_token:
                kwargs["pageToken"] = page_token

            resp = self.service.users().threads().list(**kwargs).execute()
            ids.extend(t["id"] for t in resp.get("threads", []))

            page_token = resp.get("nextPageToken")
            if not page_token:
                break

        return ids

    def get_threads(self, label: Label) -> list[ThreadMeta]:
        """Snapshot the threads carrying the label with their last activity.

        Thread details are fetched in batches of BATCH_SIZE. A failed fetch
        raises instead of being skipped.
        """
        thread_ids = self.list_thread_ids(label)
        found: dict[str, ThreadMeta] = {}
        failures: list[tuple[str, HttpError]] = []

        def _cb(request_id, response, exception):
            if exception is not None:
                failures.append((request_id, exception))
                return
            found[request_id] = ThreadMeta(
                thread_id=request_id,
                last_activity=_last_activity(response),
            )

        for start in range(0, len(thread_ids), BATCH_SIZE):
            chunk = thread_ids[start : start + BATCH_SIZE]
            batch = self.service.new_batch_http_request(callback=_cb)
            for thread_id in chunk:
                batch.add(
                    self.service.users().threads().get(
                        userId="me",
                        id=thread_id,
                        format="minimal",
                        fields="id,messages/internalDate",
                    ),
                    request_id=thread_id,
                )
            batch.execute()

            if failures:
                thread_id, exc = failures[0]
                logger.error("Fetching thread %s failed: %s", thread_id, exc)
                raise exc

        # Keep list order; batch callbacks may arrive in any order.
        return [found[t] for t in thread_ids]

    def archive_thread(self, thread: ThreadMeta) -> None:
        self.service.users().threads().modify(
            userId="me",
            id=thread.thread_id,
            body={"removeLabelIds": ["INBOX"]},
        ).execute()

    def trash_thread(self, thread: ThreadMeta) -> None:
        self.service.users().threads().trash(userId="me", id=thread.thread_id).execute()

    def remove_label(self, thread: ThreadMeta, label: Label) -> None:
        self.service.users().threads().modify(
            userId="me",
            id=thread.thread_id,
            body={"removeLabelIds": [label.id]},
        ).execute()

    # --- account ---

    def get_profile_email(self) -> str:
        """Return the address of the authenticated account."""
        return self.service.users().getProfile(userId="me").execute()["emailAddress"]

    def send_message(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text message from the authenticated account."""
        raw = _encode_message(to, subject, body)
        self.service.users().messages().send(userId="me", body={"raw": raw}).execute()
        logger.info("Sent %r to %s", subject, to)
