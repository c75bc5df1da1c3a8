from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_rpc.client import TodoRpcClient
from todo_rpc.db import SQLiteRepository
from todo_rpc.main import app
from todo_rpc.repositories import InMemoryRepository, Repository, get_repository


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path: Path) -> Repository:
    """Fresh, empty repository; every test using it runs once per backend."""
    if request.param == "sqlite":
        return SQLiteRepository(str(tmp_path / "todos.db"))
    return InMemoryRepository()


@pytest.fixture()
def memory_repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def client(memory_repo: InMemoryRepository):
    """TestClient wired to an isolated in-memory repository."""
    app.dependency_overrides[get_repository] = lambda: memory_repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def rpc(client: TestClient) -> TodoRpcClient:
    """Typed RPC client talking to the app through the TestClient transport."""
    return TodoRpcClient(http_client=client)
