from __future__ import annotations


# PUBLIC_INTERFACE
class TodoNotFoundError(LookupError):
    """Raised when a procedure targets a todo id that does not exist."""

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo with id {todo_id} not found")
