# src/todo_keeper/storage/slot.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..core.errors import StorageWriteError

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class SqliteSlot:
    """
    SQLite key-value slot.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - one row per key, the value overwritten in a single transaction

    Each method opens its own SQLite connection.
    Values larger than `quota_bytes` (UTF-8 encoded) are rejected the way
    browser local storage rejects writes over its quota.
    """

    def __init__(
        self,
        db_path: str | Path = "state.sqlite3",
        *,
        quota_bytes: int = DEFAULT_QUOTA_BYTES,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = int(quota_bytes)
        self._ensure_schema()
        logger.info("SqliteSlot ready db=%s quota=%s", self._db_path, self._quota_bytes)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row["value"])
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        try:
            size = len(value.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise StorageWriteError(f"Value is not valid UTF-8 text: {e}") from e
        if size > self._quota_bytes:
            raise StorageWriteError(
                f"Storage quota exceeded: {size} bytes > {self._quota_bytes} bytes"
            )

        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageWriteError(f"Cannot open storage: {e}") from e
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv_store(key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                                   updated_at = excluded.updated_at
                    """,
                    (key, value, time.time()),
                )
        except sqlite3.Error as e:
            raise StorageWriteError(f"Storage write failed: {e}") from e
        finally:
            conn.close()
        logger.debug("Slot write key=%s bytes=%d", key, size)
