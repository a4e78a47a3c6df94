"""SQLite-backed key/value store for the on-device profile database."""

from __future__ import annotations

import json
import sqlite3
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Any

from loguru import logger

db_lock = Lock()


class SQLiteStorage:
    def __init__(self, path: Path) -> None:
        self.path = path

    @contextmanager
    def _get_conn(self) -> Iterator[sqlite3.Connection]:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        with db_lock, self._get_conn() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS model_values (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                );
                """
            )

    def store(self, key: str, value: Any) -> None:
        self.init_db()
        with db_lock, self._get_conn() as conn:
            conn.execute(
                """
                INSERT INTO model_values (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value=excluded.value,
                    updated_at=excluded.updated_at
                """,
                (key, json.dumps(value, ensure_ascii=True), time.time()),
            )

    def load(self, key: str, default: Any) -> Any:
        try:
            self.init_db()
            with db_lock, self._get_conn() as conn:
                row = conn.execute(
                    "SELECT value FROM model_values WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.warning(f"Could not read '{key}' from {self.path}: {exc}")
            return default
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning(f"Stored value for '{key}' is not valid JSON, using default")
            return default
