from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from .errors import TodoNotFoundError
from .schemas import CreateTodoInput, DeleteTodoInput, DeleteTodoResult, Todo, UpdateTodoInput

logger = logging.getLogger(__name__)


class RpcError(Exception):
    """A procedure call that the server answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"{error} ({status_code}): {message}")


# PUBLIC_INTERFACE
class TodoRpcClient:
    """
    Typed client for the four todo procedures.

    Pass `http_client` to reuse an existing httpx.Client (for example
    FastAPI's TestClient); otherwise one is created for `base_url` and owned
    by this object. Inputs are validated with the same pydantic models the
    server uses, so an empty description fails locally with
    pydantic.ValidationError before any request is sent.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "TodoRpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _call(self, method: str, procedure: str, body: Optional[dict] = None) -> Any:
        logger.debug("RPC %s", procedure)
        res = self._http.request(method, f"/rpc/{procedure}", json=body)
        if res.is_success:
            return res.json()
        try:
            data = res.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        raise RpcError(
            res.status_code,
            str(data.get("error") or res.reason_phrase),
            str(data.get("message") or data.get("detail") or res.text),
        )

    def get_todos(self) -> List[Todo]:
        data = self._call("GET", "getTodos")
        return [Todo.model_validate(item) for item in data]

    def create_todo(self, description: str) -> Todo:
        payload = CreateTodoInput(description=description)
        return Todo.model_validate(self._call("POST", "createTodo", payload.model_dump()))

    def update_todo(
        self,
        todo_id: int,
        completed: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> Todo:
        """Raises TodoNotFoundError when the server reports the id as unknown."""
        payload = UpdateTodoInput(id=todo_id, completed=completed, description=description)
        try:
            data = self._call("POST", "updateTodo", payload.model_dump(exclude_none=True))
        except RpcError as e:
            if e.status_code == 404 and e.error == "NotFound":
                raise TodoNotFoundError(todo_id) from e
            raise
        return Todo.model_validate(data)

    def delete_todo(self, todo_id: int) -> DeleteTodoResult:
        payload = DeleteTodoInput(id=todo_id)
        return DeleteTodoResult.model_validate(self._call("POST", "deleteTodo", payload.model_dump()))
