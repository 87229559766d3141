from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List, Optional

from .models import TodoEntity
from .repositories import Repository, entity_from
from .schemas import TodoIn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    expiration_date: str = "expiration_date"
    percentage_of_completion: str = "percentage_of_completion"


_COLS = _Cols()

# SQLite INTEGER is a signed 64-bit value; no stored row can have an id outside it
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


def _to_db(value: datetime) -> str:
    # Fixed-width text keeps lexical order equal to chronological order
    return value.isoformat(timespec="microseconds")


def _storable_id(todo_id: int) -> bool:
    return _ID_MIN <= todo_id <= _ID_MAX


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    Every public method opens its own connection and commits before returning.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.expiration_date} TEXT NOT NULL,
                    {_COLS.percentage_of_completion} INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row[_COLS.id]),
            "title": row[_COLS.title],
            "description": row[_COLS.description],
            "expiration_date": datetime.fromisoformat(row[_COLS.expiration_date]),
            "percentage_of_completion": int(row[_COLS.percentage_of_completion]),
        }

    def _select_one(self, conn: sqlite3.Connection, todo_id: int) -> Optional[TodoEntity]:
        row = conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()
        return self._row_to_entity(row) if row else None

    def list_all(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table}").fetchall()
            return [self._row_to_entity(r) for r in rows]

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        if not _storable_id(todo_id):
            return None
        with self._conn() as conn:
            return self._select_one(conn, todo_id)

    def create(self, data: TodoIn) -> TodoEntity:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.description},
                    {_COLS.expiration_date}, {_COLS.percentage_of_completion})
                VALUES (?, ?, ?, ?)
                """,
                (
                    data.title,
                    data.description,
                    _to_db(data.expiration_date),
                    data.percentage_of_completion,
                ),
            )
            created = self._select_one(conn, cur.lastrowid)
            assert created is not None
        logger.info("Created todo", extra={"todo_id": created["id"]})
        return created

    def replace(self, todo_id: int, data: TodoIn) -> TodoEntity:
        if not _storable_id(todo_id):
            logger.warning("Replace matched no todo", extra={"todo_id": todo_id})
            return entity_from(todo_id, data)
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.title} = ?, {_COLS.description} = ?,
                    {_COLS.expiration_date} = ?, {_COLS.percentage_of_completion} = ?
                WHERE {_COLS.id} = ?
                """,
                (
                    data.title,
                    data.description,
                    _to_db(data.expiration_date),
                    data.percentage_of_completion,
                    todo_id,
                ),
            )
            touched = cur.rowcount > 0
        if touched:
            logger.info("Replaced todo", extra={"todo_id": todo_id})
        else:
            logger.warning("Replace matched no todo", extra={"todo_id": todo_id})
        return entity_from(todo_id, data)

    def delete(self, todo_id: int) -> bool:
        if not _storable_id(todo_id):
            return False
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            removed = cur.rowcount > 0
        if removed:
            logger.info("Deleted todo", extra={"todo_id": todo_id})
        return removed

    def set_percentage(self, todo_id: int, percentage: int) -> Optional[TodoEntity]:
        if not _storable_id(todo_id):
            return None
        with self._conn() as conn:
            cur = conn.execute(
                f"UPDATE {_COLS.table} SET {_COLS.percentage_of_completion} = ? WHERE {_COLS.id} = ?",
                (percentage, todo_id),
            )
            if cur.rowcount == 0:
                return None
            updated = self._select_one(conn, todo_id)
        logger.info("Set todo percentage to %d", percentage, extra={"todo_id": todo_id})
        return updated

    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} WHERE {_COLS.expiration_date} BETWEEN ? AND ?",
                (_to_db(start), _to_db(end)),
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]
