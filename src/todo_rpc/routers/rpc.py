from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from .. import handlers
from ..repositories import Repository, get_repository
from ..schemas import CreateTodoInput, DeleteTodoInput, DeleteTodoResult, ErrorBody, Todo, UpdateTodoInput

router = APIRouter(
    prefix="/rpc",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.get(
    "/getTodos",
    response_model=List[Todo],
    summary="getTodos",
    description="Return all todos in creation order. An empty store yields an empty list.",
)
def get_todos(repo: Repository = Depends(_get_repo)) -> List[Todo]:
    """Query procedure: list todos."""
    return handlers.get_todos(repo)


# PUBLIC_INTERFACE
@router.post(
    "/createTodo",
    response_model=Todo,
    summary="createTodo",
    description="Create a todo with a non-empty description. It starts out not completed.",
    responses={422: {"description": "Validation error"}},
)
def create_todo(payload: CreateTodoInput, repo: Repository = Depends(_get_repo)) -> Todo:
    """Mutation procedure: create a todo."""
    return handlers.create_todo(repo, payload)


# PUBLIC_INTERFACE
@router.post(
    "/updateTodo",
    response_model=Todo,
    summary="updateTodo",
    description="Change the supplied fields of an existing todo and return the full record.",
    responses={
        404: {"model": ErrorBody, "description": "Todo not found"},
        422: {"description": "Validation error"},
    },
)
def update_todo(payload: UpdateTodoInput, repo: Repository = Depends(_get_repo)) -> Todo:
    """Mutation procedure: update a todo. Unknown ids surface as 404 via the app's error handler."""
    return handlers.update_todo(repo, payload)


# PUBLIC_INTERFACE
@router.post(
    "/deleteTodo",
    response_model=DeleteTodoResult,
    summary="deleteTodo",
    description="Delete a todo. Returns success=false, not an error, when the id does not exist.",
    responses={422: {"description": "Validation error"}},
)
def delete_todo(payload: DeleteTodoInput, repo: Repository = Depends(_get_repo)) -> DeleteTodoResult:
    """Mutation procedure: delete a todo."""
    return handlers.delete_todo(repo, payload)
