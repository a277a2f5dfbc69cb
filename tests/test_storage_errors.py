import pytest
from fastapi.testclient import TestClient

from todo_app.core.config import Settings
from todo_app.errors import StorageError
from todo_app.main import create_app
from todo_app.repositories.memory_store import MemoryTodoStore


class BrokenStore(MemoryTodoStore):
    """Every read and write fails the way an unreachable database would."""

    async def connect(self):
        raise StorageError("Database connection failed")

    async def list(self, query):
        raise StorageError("Error listing todo")

    async def toggle(self, todo_id):
        raise StorageError("Error updating todo")

    async def add(self, todo):
        raise StorageError("Error creating todo")


@pytest.fixture
def broken_client():
    app = create_app(settings=Settings(STORAGE_BACKEND="memory"), store=BrokenStore())
    # startup failure is logged, the app still serves requests
    with TestClient(app) as client:
        yield client


def test_list_failure_renders_generic_error_page(broken_client):
    response = broken_client.get("/todos")

    assert response.status_code == 500
    assert "Something went wrong" in response.text


def test_toggle_failure_returns_json_error(broken_client):
    response = broken_client.patch(
        "/todos/00000000-0000-0000-0000-000000000000/toggle",
        headers={"Accept": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": {"code": "storage_error", "message": "Error updating todo"}}


def test_create_failure_is_500_not_a_form_error(broken_client):
    response = broken_client.post("/todos", data={"title": "Valid"}, follow_redirects=False)

    assert response.status_code == 500
