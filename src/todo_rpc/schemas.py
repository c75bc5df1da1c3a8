from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    Wire shape of a Todo record, returned by every procedure that yields one.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "description": "Buy groceries",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123456",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    description: str = Field(..., description="Task text")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


# PUBLIC_INTERFACE
class CreateTodoInput(BaseModel):
    """
    Input of the createTodo procedure.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"description": "Buy groceries"}})

    description: str = Field(..., min_length=1, description="Task text; must not be empty")


# PUBLIC_INTERFACE
class UpdateTodoInput(BaseModel):
    """
    Input of the updateTodo procedure.
    Only `id` is required; fields that are omitted or null are left unchanged.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"id": 123, "completed": True}})

    id: int = Field(..., description="Identifier of the todo to update")
    completed: Optional[bool] = Field(default=None, description="New completion status")
    description: Optional[str] = Field(default=None, min_length=1, description="New task text")


# PUBLIC_INTERFACE
class DeleteTodoInput(BaseModel):
    """Input of the deleteTodo procedure."""

    model_config = ConfigDict(json_schema_extra={"example": {"id": 123}})

    id: int = Field(..., description="Identifier of the todo to delete")


# PUBLIC_INTERFACE
class DeleteTodoResult(BaseModel):
    """Result of the deleteTodo procedure. `success` is False when nothing matched the id."""

    success: bool = Field(..., description="True if a record was removed")


class ErrorBody(BaseModel):
    """JSON body of every non-validation error response."""

    error: str = Field(..., description="Error kind, e.g. 'NotFound'")
    message: str = Field(..., description="Human readable error message")
