from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from todo_rpc.main import app
from todo_rpc.repositories import Repository, get_repository


def assert_todo_shape(todo: dict):
    assert set(todo) == {"id", "description", "completed", "created_at"}
    assert isinstance(todo["id"], int)
    assert isinstance(todo["description"], str)
    assert isinstance(todo["completed"], bool)
    # FastAPI/Pydantic returns strings for datetime fields
    datetime.fromisoformat(todo["created_at"])


def create(client, description="Test todo item"):
    res = client.post("/rpc/createTodo", json={"description": description})
    assert res.status_code == 200
    return res.json()


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["backend"] in ("memory", "sqlite")


class TestProcedures:
    def test_get_todos_empty(self, client):
        res = client.get("/rpc/getTodos")
        assert res.status_code == 200
        assert res.json() == []

    def test_create_todo(self, client):
        todo = create(client, "Buy milk")
        assert_todo_shape(todo)
        assert todo["description"] == "Buy milk"
        assert todo["completed"] is False

        listed = client.get("/rpc/getTodos").json()
        assert listed == [todo]

    def test_get_todos_in_creation_order(self, client):
        ids = [create(client, f"Task {i}")["id"] for i in range(5)]
        listed = client.get("/rpc/getTodos").json()
        assert [t["id"] for t in listed] == ids

    def test_update_todo_toggle(self, client):
        todo = create(client, "Toggle me")

        res = client.post("/rpc/updateTodo", json={"id": todo["id"], "completed": True})
        assert res.status_code == 200
        updated = res.json()
        assert_todo_shape(updated)
        assert updated["completed"] is True
        assert updated["description"] == "Toggle me"
        assert updated["created_at"] == todo["created_at"]

        res = client.post("/rpc/updateTodo", json={"id": todo["id"], "completed": False})
        assert res.json() == todo

    def test_update_todo_not_found(self, client):
        existing = create(client, "Bystander")

        res = client.post("/rpc/updateTodo", json={"id": 123456, "completed": True})
        assert res.status_code == 404
        body = res.json()
        assert body["error"] == "NotFound"
        assert body["message"] == "Todo with id 123456 not found"

        assert client.get("/rpc/getTodos").json() == [existing]

    def test_delete_todo(self, client):
        todo = create(client, "ToDelete")

        res = client.post("/rpc/deleteTodo", json={"id": todo["id"]})
        assert res.status_code == 200
        assert res.json() == {"success": True}
        assert client.get("/rpc/getTodos").json() == []

        # Deleting again is a normal result, not an error
        res_again = client.post("/rpc/deleteTodo", json={"id": todo["id"]})
        assert res_again.status_code == 200
        assert res_again.json() == {"success": False}

    def test_delete_leaves_others(self, client):
        todos = [create(client, f"Todo {i}") for i in range(1, 4)]
        client.post("/rpc/deleteTodo", json={"id": todos[1]["id"]})
        assert client.get("/rpc/getTodos").json() == [todos[0], todos[2]]


class TestValidationErrors:
    @pytest.mark.parametrize(
        "path,payload",
        [
            ("/rpc/createTodo", {"description": ""}),
            ("/rpc/createTodo", {}),
            ("/rpc/updateTodo", {"completed": True}),
            ("/rpc/updateTodo", {"id": "abc", "completed": True}),
            ("/rpc/updateTodo", {"id": 1, "description": ""}),
            ("/rpc/deleteTodo", {}),
        ],
    )
    def test_invalid_input_rejected(self, client, path, payload):
        res = client.post(path, json=payload)
        assert res.status_code == 422
        body = res.json()
        assert body.get("error") == "ValidationError"
        assert body.get("message") == "Request validation failed"
        assert isinstance(body.get("detail"), list)

    def test_rejected_create_does_not_store(self, client):
        client.post("/rpc/createTodo", json={"description": ""})
        assert client.get("/rpc/getTodos").json() == []


class _BrokenRepository(Repository):
    def create(self, description):
        raise RuntimeError("disk on fire")

    def get(self, todo_id):
        raise RuntimeError("disk on fire")

    def update(self, todo_id, data):
        raise RuntimeError("disk on fire")

    def delete(self, todo_id):
        raise RuntimeError("disk on fire")

    def list(self):
        raise RuntimeError("disk on fire")


class TestStorageFailure:
    def test_storage_errors_propagate(self):
        app.dependency_overrides[get_repository] = lambda: _BrokenRepository()
        try:
            with pytest.raises(RuntimeError, match="disk on fire"):
                TestClient(app).get("/rpc/getTodos")

            res = TestClient(app, raise_server_exceptions=False).post(
                "/rpc/createTodo", json={"description": "x"}
            )
            assert res.status_code == 500
        finally:
            app.dependency_overrides.clear()
