"""Key-value storage backends for the history list."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Protocol


class KeyValueBackend(Protocol):
    """Minimal string key-value contract, like browser local storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value or None."""

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""


class InMemoryKeyValueBackend:
    """Dict-backed storage used for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteKeyValueBackend:
    """File-backed storage in a single `kv(key, value)` table."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        _ensure_kv_table(self._path)

    def get(self, key: str) -> str | None:
        with sqlite3.connect(self._path) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with sqlite3.connect(self._path) as conn:
            conn.execute(
                "INSERT INTO kv(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, value),
            )
            conn.commit()


def _ensure_kv_table(db_path: Path) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        conn.commit()
