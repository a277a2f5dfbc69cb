"""
FastAPI dependencies.

The store is created by the application factory and kept on
``app.state``; handlers get it (or a service around it) injected.
"""

from fastapi import Depends, Request

from todo_app.core.config import Settings, settings
from todo_app.db.session import Database
from todo_app.repositories.base import TodoStore
from todo_app.repositories.memory_store import MemoryTodoStore
from todo_app.repositories.todo_repository import TodoRepository
from todo_app.services.todo_service import TodoService


def build_store(config: Settings = settings) -> TodoStore:
    """Construct the store selected by ``STORAGE_BACKEND``."""
    if config.STORAGE_BACKEND == "memory":
        return MemoryTodoStore()
    database = Database(
        config.DATABASE_URL,
        echo=config.DEBUG,
        connect_timeout=config.DB_CONNECT_TIMEOUT_SECONDS,
    )
    return TodoRepository(database)


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


def get_todo_service(store: TodoStore = Depends(get_store)) -> TodoService:
    return TodoService(store)
