"""
Storage interface shared by the database and in-memory todo stores.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from todo_app.models.todo import Todo
from todo_app.schemas.todo import TodoStats
from todo_app.services.query_builder import TodoQuery


def parse_todo_id(todo_id: Any) -> Optional[UUID]:
    """Coerce a path parameter to a UUID; None when it cannot be one."""
    if isinstance(todo_id, UUID):
        return todo_id
    try:
        return UUID(str(todo_id))
    except ValueError:
        return None


class TodoStore(ABC):
    """Persistence operations used by ``TodoService``."""

    backend: str = "unknown"

    @property
    @abstractmethod
    def state(self) -> str:
        """Connection state label reported on /health."""

    async def connect(self) -> None:
        """Establish the underlying connection, if any."""

    async def close(self) -> None:
        """Release the underlying connection, if any."""

    @abstractmethod
    async def ping(self) -> bool:
        ...

    async def schema_revision(self) -> Optional[str]:
        return None

    @abstractmethod
    async def list(self, query: TodoQuery) -> List[Todo]:
        ...

    @abstractmethod
    async def get(self, todo_id: Any) -> Optional[Todo]:
        ...

    @abstractmethod
    async def add(self, todo: Todo) -> Todo:
        ...

    @abstractmethod
    async def replace(self, todo_id: Any, fields: Dict[str, Any]) -> Optional[Todo]:
        """Overwrite the given fields; None when the todo does not exist."""

    @abstractmethod
    async def toggle(self, todo_id: Any) -> Optional[Todo]:
        ...

    @abstractmethod
    async def delete(self, todo_id: Any) -> bool:
        ...

    @abstractmethod
    async def stats(self, now: datetime) -> TodoStats:
        ...

    @abstractmethod
    async def categories(self) -> List[str]:
        """Distinct categories, sorted, for the filter dropdown."""
