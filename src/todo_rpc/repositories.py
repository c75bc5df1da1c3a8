from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from threading import Lock, RLock
from typing import List, Optional

from .models import TodoEntity
from .schemas import UpdateTodoInput
from .settings import get_settings


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, description: str) -> TodoEntity:
        """Insert a new, not yet completed TodoEntity and return it with id and created_at set."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """
        Return a TodoEntity by id, or None if not found.

        No procedure needs a single-record read; this is the storage-level
        lookup used to confirm what a backend actually persisted.
        """

    @abstractmethod
    def update(self, todo_id: int, data: UpdateTodoInput) -> Optional[TodoEntity]:
        """Update fields of an existing TodoEntity. Return updated entity or None if not found."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return every stored TodoEntity in creation order (ascending id)."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now()

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, description: str) -> TodoEntity:
        entity: TodoEntity = {
            "id": self._allocate_id(),
            "description": description,
            "completed": False,
            "created_at": self._now(),
        }
        with self._lock:
            self._items[entity["id"]] = entity
        return entity.copy()

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def update(self, todo_id: int, data: UpdateTodoInput) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None

            # Update only provided fields
            updated = existing.copy()
            if data.description is not None:
                updated["description"] = data.description
            if data.completed is not None:
                updated["completed"] = data.completed

            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def list(self) -> List[TodoEntity]:
        with self._lock:
            # Return copies to avoid external mutation
            return [self._items[k].copy() for k in sorted(self._items)]


_repository: Optional[Repository] = None
_repository_lock = Lock()


def _build_repository() -> Repository:
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        return SQLiteRepository(settings.sqlite_db_path)
    return InMemoryRepository()


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """
    Return the process-wide repository configured by settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository backed by SQLITE_DB_PATH

    FastAPI resolves this dependency on threadpool workers; construction is
    serialized so concurrent first requests share one instance.
    """
    global _repository
    with _repository_lock:
        if _repository is None:
            _repository = _build_repository()
        return _repository


def reset_repository() -> None:
    """Forget the shared repository; the next get_repository() rebuilds it from settings."""
    global _repository
    with _repository_lock:
        _repository = None
