"""
SQLite-backed configuration store.

Durable home for the main prompt and the personality list.

Key properties:
- Implements exactly the same interface as InMemoryConfigStore
- One table: config_kv (key, value, updated_at)
- Reads degrade: an unreadable database behaves like an empty one, so the
  proxy keeps serving with defaults
- Writes fail loudly with ConfigStoreError, so admin callers see the failure
"""

import logging
import sqlite3
import threading
from typing import Optional

from .base import ConfigStore, ConfigStoreError

logger = logging.getLogger(__name__)


class SQLiteConfigStore(ConfigStore):
    """Key-value configuration persisted in a single SQLite table."""

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to the SQLite database file.
                     If None, uses ':memory:' (useful for testing).
        """
        self.db_path = db_path or ":memory:"
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._initialize_db()

    def _initialize_db(self) -> None:
        """Create the schema; a no-op when it already exists."""
        with self._lock:
            cursor = self._conn.cursor()

            if self.db_path != ":memory:":
                cursor.execute("PRAGMA journal_mode=WAL")

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS config_kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            self._conn.commit()

        logger.debug(f"SQLite config store initialized: {self.db_path}")

    def get(self, key: str) -> Optional[str]:
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT value FROM config_kv WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error reading '{key}': {e}")
            return None

        return row[0] if row else None

    def put(self, key: str, value: str) -> None:
        try:
            with self._lock:
                self._conn.execute(
                    """
                    INSERT INTO config_kv (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, value),
                )
                self._conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error writing '{key}': {e}")
            raise ConfigStoreError(f"Could not write '{key}': {e}") from e

    def close(self) -> None:
        with self._lock:
            self._conn.close()
