from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import TodoEntity
from .schemas import TodoIn
from .settings import get_settings
from .utils import incoming_window

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def list_all(self) -> List[TodoEntity]:
        """Return every TodoEntity in store order."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def create(self, data: TodoIn) -> TodoEntity:
        """Create and return a new TodoEntity. The store assigns the id."""

    @abstractmethod
    def replace(self, todo_id: int, data: TodoIn) -> TodoEntity:
        """
        Overwrite every field of the todo with `todo_id`.

        No existence check is made: replacing an absent id touches nothing and
        still returns the submitted values.
        """

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def set_percentage(self, todo_id: int, percentage: int) -> Optional[TodoEntity]:
        """Set percentage_of_completion. Return updated entity or None if not found."""

    @abstractmethod
    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        """Return todos whose expiration_date lies in [start, end] (inclusive)."""

    def mark_done(self, todo_id: int) -> Optional[TodoEntity]:
        """Set the todo's completion to 100%."""
        return self.set_percentage(todo_id, 100)

    def list_incoming(self, days: float, now: datetime) -> List[TodoEntity]:
        """Return todos expiring between `now` and the end of today + `days`."""
        start, end = incoming_window(days, now)
        return self.list_between(start, end)


def entity_from(todo_id: int, data: TodoIn) -> TodoEntity:
    return {
        "id": todo_id,
        "title": data.title,
        "description": data.description,
        "expiration_date": data.expiration_date,
        "percentage_of_completion": data.percentage_of_completion,
    }


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def list_all(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items.values()]

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def create(self, data: TodoIn) -> TodoEntity:
        entity = entity_from(self._allocate_id(), data)
        with self._lock:
            self._items[entity["id"]] = entity
        logger.info("Created todo", extra={"todo_id": entity["id"]})
        return entity.copy()

    def replace(self, todo_id: int, data: TodoIn) -> TodoEntity:
        entity = entity_from(todo_id, data)
        with self._lock:
            if todo_id in self._items:
                self._items[todo_id] = entity
                logger.info("Replaced todo", extra={"todo_id": todo_id})
            else:
                logger.warning("Replace matched no todo", extra={"todo_id": todo_id})
        return entity.copy()

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            removed = self._items.pop(todo_id, None) is not None
        if removed:
            logger.info("Deleted todo", extra={"todo_id": todo_id})
        return removed

    def set_percentage(self, todo_id: int, percentage: int) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None
            existing["percentage_of_completion"] = percentage
            logger.info("Set todo percentage to %d", percentage, extra={"todo_id": todo_id})
            return existing.copy()

    def list_between(self, start: datetime, end: datetime) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items.values() if start <= t["expiration_date"] <= end]


# PUBLIC_INTERFACE
@lru_cache
def get_repository() -> Repository:
    """
    Return the process-wide repository selected by settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by SQLITE_DB_PATH
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using sqlite repository at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory repository")
    return InMemoryRepository()
