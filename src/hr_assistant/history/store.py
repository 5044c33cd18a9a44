"""SQLite-backed job description history."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from datetime import datetime
from pathlib import Path

from hr_assistant.history.models import HistoryItem

DEFAULT_DB_PATH = Path.home() / ".hr-assistant" / "history.db"


class HistoryStore:
    """Stores generated job descriptions, newest first on read."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS job_descriptions (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    company_name TEXT,
                    created_at TEXT NOT NULL
                )
            """)

    def add(self, item: HistoryItem) -> HistoryItem:
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """INSERT OR REPLACE INTO job_descriptions
                   (id, title, description, company_name, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    item.id,
                    item.title,
                    item.description,
                    item.company_name,
                    item.created_at.isoformat(),
                ),
            )
        return item

    def list(self, limit: int = 50) -> list[HistoryItem]:
        with closing(self._connect()) as conn, conn:
            rows = conn.execute(
                "SELECT * FROM job_descriptions ORDER BY created_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_item(row) for row in rows]

    def get(self, item_id: str) -> HistoryItem | None:
        with closing(self._connect()) as conn, conn:
            row = conn.execute(
                "SELECT * FROM job_descriptions WHERE id = ?", (item_id,)
            ).fetchone()
        return self._row_to_item(row) if row else None

    def delete(self, item_id: str) -> bool:
        """Delete one entry; returns False when ``item_id`` is unknown."""
        with closing(self._connect()) as conn, conn:
            cursor = conn.execute("DELETE FROM job_descriptions WHERE id = ?", (item_id,))
            return cursor.rowcount > 0

    def clear(self) -> int:
        with closing(self._connect()) as conn, conn:
            cursor = conn.execute("DELETE FROM job_descriptions")
            return cursor.rowcount

    @staticmethod
    def _row_to_item(row: tuple) -> HistoryItem:
        return HistoryItem(
            id=row[0],
            title=row[1],
            description=row[2],
            company_name=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
