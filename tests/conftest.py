"""
Pytest configuration and shared fixtures.
"""

import asyncio
import os

import pytest
from fastapi.testclient import TestClient

from todo_app.core.config import Settings
from todo_app.main import create_app
from todo_app.repositories.memory_store import MemoryTodoStore
from todo_app.services.query_builder import TodoQuery


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)


@pytest.fixture
def store():
    return MemoryTodoStore()


@pytest.fixture
def client(store):
    """TestClient over an app wired to an in-memory store."""
    app = create_app(settings=Settings(STORAGE_BACKEND="memory"), store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stored(store):
    """Callable returning every todo in the store, newest first."""

    def _stored():
        return asyncio.run(store.list(TodoQuery()))

    return _stored
