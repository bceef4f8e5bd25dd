"""SQLite key/value store that persists the run ledger between invocations."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from gmail_label_sweeper import constants

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS properties (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT
);
"""


class PropertyStore:
    """Persistent string properties keyed by name."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or constants.LEDGER_DB_PATH
        self.db_path = Path(self.db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.executescript(_CREATE_TABLES_SQL)

    # --- public API ---

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        row = self._conn.execute(
            "SELECT value FROM properties WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace a value in a single transaction."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO properties (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = excluded.updated_at",
                (key, value, datetime.now().isoformat()),
            )

    def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is a no-op."""
        with self._conn:
            self._conn.execute("DELETE FROM properties WHERE key = ?", (key,))

    def get_info(self) -> dict:
        """Return store statistics."""
        file_size = self.db_path.stat().st_size if self.db_path.exists() else 0

        row = self._conn.execute(
            "SELECT COUNT(*) AS c, MAX(updated_at) AS last_update FROM properties"
        ).fetchone()

        return {
            "db_path": str(self.db_path),
            "db_file_size": file_size,
            "property_count": row["c"],
            "last_update": row["last_update"],
        }

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # --- context manager ---

    def __enter__(self) -> PropertyStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()
