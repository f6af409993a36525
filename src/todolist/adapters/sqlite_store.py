"""SQLite task storage adapter."""

import logging
import sqlite3
from pathlib import Path

from todolist.core.tasks import Task

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS scheduler (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date CHAR(8) NOT NULL DEFAULT '',
    title VARCHAR(256) NOT NULL DEFAULT '',
    comment TEXT NOT NULL DEFAULT '',
    repeat VARCHAR(128) NOT NULL DEFAULT ''
);
CREATE INDEX IF NOT EXISTS scheduler_date ON scheduler (date);
"""


class SQLiteTaskStore:
    """
    SQLite task storage.

    Implements TaskRepository protocol. Opens one connection per call and
    commits on success, so each method is a single transaction. No business
    logic - just I/O.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.executescript(SCHEMA)
        finally:
            conn.close()
        logger.info(f"Task store ready at {self.db_path}")

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        conn = self._connect()
        try:
            with conn:
                return conn.execute(sql, params)
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            date=row["date"],
            title=row["title"],
            comment=row["comment"],
            repeat=row["repeat"],
        )

    def add(self, task: Task) -> str:
        """Insert a task and return its new id."""
        cur = self._execute(
            "INSERT INTO scheduler (date, title, comment, repeat) VALUES (?, ?, ?, ?)",
            (task.date, task.title, task.comment, task.repeat),
        )
        return str(cur.lastrowid)

    def get(self, task_id: str) -> Task | None:
        """Fetch one task. Returns None if not found."""
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, date, title, comment, repeat FROM scheduler WHERE id = ?",
                (task_id,),
            ).fetchone()
        finally:
            conn.close()
        return self._row_to_task(row) if row else None

    def fetch_upcoming(self, limit: int) -> list[Task]:
        """Fetch up to `limit` tasks, earliest date first."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, date, title, comment, repeat FROM scheduler ORDER BY date LIMIT ?",
                (limit,),
            ).fetchall()
        finally:
            conn.close()
        return [self._row_to_task(row) for row in rows]

    def update(self, task: Task) -> bool:
        """Overwrite date, title, comment and repeat. Returns False if no row matched."""
        cur = self._execute(
            "UPDATE scheduler SET date = ?, title = ?, comment = ?, repeat = ? WHERE id = ?",
            (task.date, task.title, task.comment, task.repeat, task.id),
        )
        return cur.rowcount > 0

    def set_date(self, task_id: str, new_date: str) -> bool:
        """Overwrite only the date. Returns False if no row matched."""
        cur = self._execute("UPDATE scheduler SET date = ? WHERE id = ?", (new_date, task_id))
        return cur.rowcount > 0

    def delete(self, task_id: str) -> int:
        """Delete a task. Returns the number of rows removed."""
        cur = self._execute("DELETE FROM scheduler WHERE id = ?", (task_id,))
        return cur.rowcount
