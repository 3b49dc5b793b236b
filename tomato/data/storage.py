from __future__ import annotations

"""SQLite storage for preferences and the history of finished rounds."""

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterator


SCHEMA = """
CREATE TABLE IF NOT EXISTS rounds(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    started_at TEXT NOT NULL,
    duration_sec INTEGER NOT NULL,
    kind TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS settings(
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


@dataclass(frozen=True)
class RoundRow:
    id: int
    started_at: str
    duration_sec: int
    kind: str


class Storage:
    """One short-lived connection per call; writes go through `_transaction`."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _fetch(self, query: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        with self._transaction() as conn:
            return conn.execute(query, params).fetchall()

    def init_db(self) -> None:
        with self._transaction() as conn:
            conn.executescript(SCHEMA)

    def get_setting(self, key: str, default: Any = None) -> Any:
        rows = self._fetch("SELECT value FROM settings WHERE key = ?", (key,))
        if not rows:
            return default
        try:
            return json.loads(rows[0]["value"])
        except (TypeError, json.JSONDecodeError):
            return rows[0]["value"]

    def set_setting(self, key: str, value: Any) -> None:
        with self._transaction() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO settings(key, value) VALUES(?, ?)",
                (key, json.dumps(value)),
            )

    def insert_round(self, started_at: str, duration_sec: int, kind: str = "focus") -> int:
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO rounds(started_at, duration_sec, kind) VALUES (?, ?, ?)",
                (started_at, int(duration_sec), kind),
            )
            return int(cursor.lastrowid)

    def list_rounds(self, limit: int = 100) -> list[RoundRow]:
        """Most recent rounds first."""
        rows = self._fetch(
            "SELECT id, started_at, duration_sec, kind FROM rounds ORDER BY id DESC LIMIT ?",
            (limit,),
        )
        return [RoundRow(row["id"], row["started_at"], row["duration_sec"], row["kind"]) for row in rows]

    def completed_rounds_today(self, today: date | None = None) -> int:
        day = (today or date.today()).isoformat()
        rows = self._fetch(
            "SELECT COUNT(*) AS c FROM rounds WHERE kind = 'focus' AND date(started_at) = ?",
            (day,),
        )
        return int(rows[0]["c"])

    def total_focus_seconds(self) -> int:
        rows = self._fetch("SELECT COALESCE(SUM(duration_sec), 0) AS total FROM rounds WHERE kind = 'focus'")
        return int(rows[0]["total"])


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")
