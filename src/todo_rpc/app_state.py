"""
Client application state.

`TodoListController` mirrors the server's todo list and drives it through
the RPC client. Local state is only ever replaced from confirmed server
responses; a failed call is logged and leaves the state exactly as it was.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx
from pydantic import ValidationError

from .client import RpcError, TodoRpcClient
from .errors import TodoNotFoundError
from .schemas import Todo

logger = logging.getLogger(__name__)

_RPC_FAILURES = (RpcError, TodoNotFoundError, httpx.HTTPError, ValidationError)


@dataclass(frozen=True)
class TodoStats:
    total: int
    completed: int

    @property
    def remaining(self) -> int:
        return self.total - self.completed


# PUBLIC_INTERFACE
class TodoListController:
    """Local mirror of the todo list plus the user actions that change it."""

    def __init__(self, client: TodoRpcClient) -> None:
        self._client = client
        self.todos: List[Todo] = []
        self.is_loading = False
        self.is_creating = False
        self.new_description = ""

    def load(self) -> None:
        """Replace local state with the server list. On failure the list stays as it was."""
        self.is_loading = True
        try:
            self.todos = self._client.get_todos()
        except _RPC_FAILURES:
            logger.exception("Failed to load todos")
        finally:
            self.is_loading = False

    def create(self, text: Optional[str] = None) -> Optional[Todo]:
        """
        Create a todo from `text` (or the pending `new_description`).

        Whitespace-only input is rejected without calling the server. On success
        the new record is appended and the pending input cleared.
        """
        description = (self.new_description if text is None else text).strip()
        if not description:
            return None

        self.is_creating = True
        try:
            created = self._client.create_todo(description)
        except _RPC_FAILURES:
            logger.exception("Failed to create todo")
            return None
        finally:
            self.is_creating = False

        self.todos = [*self.todos, created]
        self.new_description = ""
        return created

    def toggle(self, todo: Todo) -> Optional[Todo]:
        """Flip `completed` on the server and swap in the returned record."""
        try:
            updated = self._client.update_todo(todo.id, completed=not todo.completed)
        except _RPC_FAILURES:
            logger.exception("Failed to update todo %s", todo.id)
            return None
        self.todos = [updated if t.id == todo.id else t for t in self.todos]
        return updated

    def delete(self, todo_id: int) -> bool:
        """Delete on the server; drop the local record only if the server confirms removal."""
        try:
            result = self._client.delete_todo(todo_id)
        except _RPC_FAILURES:
            logger.exception("Failed to delete todo %s", todo_id)
            return False
        if result.success:
            self.todos = [t for t in self.todos if t.id != todo_id]
        return result.success

    def find(self, todo_id: int) -> Optional[Todo]:
        return next((t for t in self.todos if t.id == todo_id), None)

    def stats(self) -> TodoStats:
        return TodoStats(total=len(self.todos), completed=sum(1 for t in self.todos if t.completed))

    def render(self) -> str:
        """Plain-text view of the list, one todo per line, followed by the counters."""
        if self.is_loading:
            return "Loading your todos..."
        if not self.todos:
            return "No todos yet! Add your first todo to get started."

        lines = []
        for t in self.todos:
            mark = "x" if t.completed else " "
            lines.append(f"[{mark}] {t.id:>4}  {t.description}  (created {t.created_at:%Y-%m-%d})")
        s = self.stats()
        lines.append(f"Total: {s.total}  Completed: {s.completed}  Remaining: {s.remaining}")
        return "\n".join(lines)
