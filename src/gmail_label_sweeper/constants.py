"""Constants for Gmail Label Sweeper."""

from pathlib import Path

# --- Config paths ---
CONFIG_DIR = Path.home() / ".gmail-label-sweeper"
CREDENTIALS_PATH = CONFIG_DIR / "credentials.json"
TOKEN_PATH = CONFIG_DIR / "token.json"
LEDGER_DB_PATH = CONFIG_DIR / "ledger.db"

# --- Gmail API ---
SCOPES = ["https://www.googleapis.com/auth/gmail.modify"]  # also covers send
BATCH_SIZE = 50  # threads per BatchHttpRequest
PAGE_SIZE = 500  # threads per list page

# --- Run ledger ---
RUNS_PROPERTY_KEY = "MAILBOX_ACTION_RUNS_JSON"
MAX_RUNS_TO_KEEP = 300

# --- Weekly summary ---
SUMMARY_SUBJECT = "Weekly Gmail automation summary"
SUMMARY_TO_ENVVAR = "GMAIL_LABEL_SWEEPER_SUMMARY_TO"
