"""
Tool: Learning State Persistence
Purpose: Store the personalization logs as one JSON blob under a fixed key

Blob format:
    {
      "interactions": [{"category", "affect", "accepted", "timestamp"}],  # <= 100
      "moodPatterns": [{"mood", "hour", "successRate", "timestamp"}]      # <= 50
    }

Contract:
    load() -> dict | None   None for a missing key, a failed read, or a
                            blob that does not decode to a JSON object
    save(state)             raises PersistenceError when the write fails

The caller decides that None means "start from empty state".

Database: data/moodo.db
    - kv_store: key -> value text, updated_at
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from moodo import DB_PATH

logger = logging.getLogger(__name__)


DEFAULT_STORAGE_KEY = "MoodoUserLearningData"


class PersistenceError(Exception):
    """A write to the key-value store failed."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class SQLiteKeyValueStore:
    """Key-value blobs in a single SQLite table."""

    def __init__(self, db_path: Path | str | None = None):
        self.db_path = Path(db_path) if db_path else DB_PATH

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection, creating the table if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row

        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
        return conn

    def get(self, key: str) -> str | None:
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            now = datetime.now().isoformat()
            cursor.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = ?, updated_at = ?
            """,
                (key, value, now, value, now),
            )
            conn.commit()
        finally:
            conn.close()


class LearningStateRepository:
    """Encodes and decodes the learning state blob under one key."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self) -> dict[str, Any] | None:
        try:
            raw = self.store.get(self.key)
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not read learning state '{self.key}': {e}")
            return None

        if raw is None:
            return None

        try:
            state = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Discarding undecodable learning state '{self.key}': {e}")
            return None

        if not isinstance(state, dict):
            logger.warning(f"Discarding learning state '{self.key}': expected a JSON object")
            return None

        return state

    def save(self, state: dict[str, Any]) -> None:
        try:
            encoded = json.dumps(state)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Learning state is not JSON-serializable: {e}") from e

        try:
            self.store.set(self.key, encoded)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not write learning state '{self.key}': {e}") from e
