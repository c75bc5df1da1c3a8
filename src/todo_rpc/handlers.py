"""
Procedure handlers.

Each handler is a stateless function that maps an already validated input
model to one repository operation and returns a typed result. Storage errors
are not caught here; they propagate to the transport layer unchanged.
"""
from __future__ import annotations

import logging
from typing import List

from .errors import TodoNotFoundError
from .repositories import Repository
from .schemas import CreateTodoInput, DeleteTodoInput, DeleteTodoResult, Todo, UpdateTodoInput

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_todos(repo: Repository) -> List[Todo]:
    """Return every stored todo in creation order."""
    items = repo.list()
    logger.debug("Fetched %d todos", len(items))
    return [Todo(**it) for it in items]


# PUBLIC_INTERFACE
def create_todo(repo: Repository, payload: CreateTodoInput) -> Todo:
    """Insert a new, not yet completed todo and return it."""
    created = repo.create(payload.description)
    logger.info("Created todo id=%s", created["id"])
    return Todo(**created)


# PUBLIC_INTERFACE
def update_todo(repo: Repository, payload: UpdateTodoInput) -> Todo:
    """
    Apply the fields present in `payload` to the todo it names.

    Raises:
        TodoNotFoundError: no todo has `payload.id`.
    """
    updated = repo.update(payload.id, payload)
    if updated is None:
        logger.warning("Update of missing todo id=%s", payload.id)
        raise TodoNotFoundError(payload.id)
    logger.info("Updated todo id=%s completed=%s", updated["id"], updated["completed"])
    return Todo(**updated)


# PUBLIC_INTERFACE
def delete_todo(repo: Repository, payload: DeleteTodoInput) -> DeleteTodoResult:
    """Remove the todo if present; `success` reports whether anything was removed."""
    removed = repo.delete(payload.id)
    logger.info("Delete todo id=%s success=%s", payload.id, removed)
    return DeleteTodoResult(success=removed)
