"""
In-process todo store.

Keeps transient ``Todo`` instances in a dict. Used by the test suite and
for running the UI without a database (``STORAGE_BACKEND=memory``).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from todo_app.models.todo import Todo, before_save, set_completed
from todo_app.repositories.base import TodoStore, parse_todo_id
from todo_app.schemas.todo import TodoStats
from todo_app.services.query_builder import TodoQuery
from todo_app.services.stats import build_stats
from todo_app.utils.time import as_utc, utc_now


class MemoryTodoStore(TodoStore):
    backend = "memory"

    def __init__(self):
        self._todos: Dict[UUID, Todo] = {}

    @property
    def state(self) -> str:
        return "connected"

    async def ping(self) -> bool:
        return True

    async def list(self, query: TodoQuery) -> List[Todo]:
        return query.order(todo for todo in self._todos.values() if query.matches(todo))

    async def get(self, todo_id: Any) -> Optional[Todo]:
        key = parse_todo_id(todo_id)
        if key is None:
            return None
        return self._todos.get(key)

    async def add(self, todo: Todo) -> Todo:
        before_save(todo)
        self._todos[todo.id] = todo
        return todo

    async def replace(self, todo_id: Any, fields: Dict[str, Any]) -> Optional[Todo]:
        todo = await self.get(todo_id)
        if todo is None:
            return None
        for field, value in fields.items():
            setattr(todo, field, value)
        before_save(todo)
        return todo

    async def toggle(self, todo_id: Any) -> Optional[Todo]:
        todo = await self.get(todo_id)
        if todo is None:
            return None
        now = utc_now()
        set_completed(todo, not todo.completed, now)
        before_save(todo, now)
        return todo

    async def delete(self, todo_id: Any) -> bool:
        key = parse_todo_id(todo_id)
        if key is None:
            return False
        return self._todos.pop(key, None) is not None

    async def stats(self, now: datetime) -> TodoStats:
        todos = list(self._todos.values())
        completed = sum(1 for todo in todos if todo.completed)
        overdue = sum(
            1
            for todo in todos
            if not todo.completed and todo.due_date is not None and as_utc(todo.due_date) < now
        )
        return build_stats(len(todos), completed, overdue)

    async def categories(self) -> List[str]:
        return sorted({todo.category for todo in self._todos.values()})
