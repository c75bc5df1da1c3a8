from __future__ import annotations

import threading
import time
from pathlib import Path

import pytest

from todo_rpc import repositories
from todo_rpc.db import SQLiteRepository
from todo_rpc.settings import get_settings

_VARS = ("PERSISTENCE_BACKEND", "SQLITE_DB_PATH", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "TODO_RPC_URL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    repositories.reset_repository()
    yield
    repositories.reset_repository()


def test_defaults():
    s = get_settings()
    assert s.persistence_backend == "memory"
    assert s.sqlite_db_path == "./data/todos.db"
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"
    assert s.server_url == "http://127.0.0.1:8000"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", " SQLite ")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("TODO_RPC_URL", "http://todo.test:9000/")

    s = get_settings()
    assert s.persistence_backend == "sqlite"
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"
    assert s.server_url == "http://todo.test:9000"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "postgres")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    s = get_settings()
    assert s.persistence_backend == "memory"
    assert s.log_level == "INFO"


def test_repository_factory_is_shared_memory():
    repo = repositories.get_repository()
    assert isinstance(repo, repositories.InMemoryRepository)
    assert repositories.get_repository() is repo


def test_concurrent_first_calls_share_one_repository(monkeypatch):
    class SlowRepository(repositories.InMemoryRepository):
        def __init__(self) -> None:
            time.sleep(0.2)
            super().__init__()

    monkeypatch.setattr(repositories, "InMemoryRepository", SlowRepository)
    start = threading.Barrier(2)
    seen = []

    def worker():
        start.wait()
        seen.append(repositories.get_repository())

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 2
    assert seen[0] is seen[1]


def test_repository_factory_sqlite(monkeypatch, tmp_path: Path):
    db_path = tmp_path / "nested" / "todos.db"
    monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_DB_PATH", str(db_path))

    repo = repositories.get_repository()

    assert isinstance(repo, SQLiteRepository)
    assert db_path.exists()


def test_sqlite_data_survives_new_repository(tmp_path: Path):
    db_path = str(tmp_path / "todos.db")
    created = SQLiteRepository(db_path).create("Persisted")

    assert SQLiteRepository(db_path).list() == [created]
