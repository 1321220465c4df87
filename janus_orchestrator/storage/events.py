from __future__ import annotations

import json
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Union

SCHEMA = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT DEFAULT (datetime('now')),
    source TEXT,
    type TEXT,
    data TEXT
)
"""


@dataclass(frozen=True)
class Event:
    id: int
    created_at: str
    source: str
    type: str
    data: Any


class EventLog:
    """Append-only event sink backed by a single SQLite table."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._connection = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        with self._connection:
            self._connection.execute(SCHEMA)

    def record(self, source: str, type: str, payload: Any) -> None:
        data = json.dumps(payload, ensure_ascii=False)
        with self._lock, self._connection:
            self._connection.execute(
                "INSERT INTO events (source, type, data) VALUES (?, ?, ?)",
                (source, type, data),
            )

    def recent(self, limit: int = 20) -> List[Event]:
        with self._lock:
            rows = self._connection.execute(
                "SELECT id, created_at, source, type, data FROM events ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            Event(
                id=row["id"],
                created_at=row["created_at"],
                source=row["source"],
                type=row["type"],
                data=json.loads(row["data"]) if row["data"] is not None else None,
            )
            for row in rows
        ]

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
