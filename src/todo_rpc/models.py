from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-side shape of a Todo record, shared by every repository backend.

    Fields:
    - id: Unique integer identifier, assigned by the store and never reused
    - description: Non-empty task text
    - completed: Boolean completion flag (never null)
    - created_at: Local creation timestamp, assigned by the store
    """

    id: int
    description: str
    completed: bool
    created_at: datetime
