"""OAuth helpers for the Gmail API."""

from __future__ import annotations

import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

from gmail_label_sweeper import constants

logger = logging.getLogger(__name__)


def _load_credentials(credentials_path: Path, token_path: Path, interactive: bool) -> Credentials:
    creds: Credentials | None = None

    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), constants.SCOPES)

    if creds and creds.expired and creds.refresh_token:
        logger.debug("Refreshing expired Gmail token")
        creds.refresh(Request())
    elif not creds or not creds.valid:
        if not credentials_path.exists():
            raise FileNotFoundError(
                f"Credentials file not found at {credentials_path}.\n"
                "Download your OAuth client credentials from the Google Cloud Console "
                "and save them as:\n"
                f"  {credentials_path}"
            )
        if not interactive:
            raise PermissionError(
                f"No valid Gmail token at {token_path}. "
                "Run 'gmail-label-sweeper auth' once from a terminal."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), constants.SCOPES)
        creds = flow.run_local_server(port=0)

    token_path.write_text(creds.to_json())
    return creds


def get_gmail_service(interactive: bool = False) -> Resource:
    """Return an authenticated Gmail API service object.

    The cached token at TOKEN_PATH is reused and refreshed when expired.
    The browser consent flow only runs when ``interactive`` is set, so a
    scheduled job without a usable token fails fast instead of hanging.
    """
    constants.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    creds = _load_credentials(constants.CREDENTIALS_PATH, constants.TOKEN_PATH, interactive)
    return build("gmail", "v1", credentials=creds, cache_discovery=False)


def check_auth() -> str | None:
    """Authenticate interactively and return the account address, or None."""
    try:
        service = get_gmail_service(interactive=True)
        return service.users().getProfile(userId="me").execute()["emailAddress"]
    except Exception as exc:  # noqa: BLE001
        logger.error("Authentication failed: %s", exc)
        return None
