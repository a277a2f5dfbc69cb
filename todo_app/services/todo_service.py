"""
Todo business logic service.

Route handlers talk to this service only; it builds queries, applies
validation results to the store and assembles the view models the
templates render.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from todo_app.errors import NotFoundError
from todo_app.models.todo import Todo, new_todo
from todo_app.repositories.base import TodoStore
from todo_app.schemas.todo import TodoForm, TodoStats
from todo_app.services.query_builder import (
    ALL,
    build_list_query,
    build_search_query,
    parse_filter,
    parse_priority,
    parse_sort,
)
from todo_app.utils.time import utc_now

logger = logging.getLogger(__name__)


@dataclass
class TodoListPage:
    """Everything the list template needs."""

    title: str
    todos: List[Todo]
    stats: TodoStats
    categories: List[str]
    current_filter: str = ALL
    current_sort: str = "newest"
    current_category: str = ALL
    current_priority: str = ALL
    search_query: Optional[str] = None


class TodoService:
    """Service for todo business logic."""

    def __init__(self, store: TodoStore):
        self.store = store

    async def list_page(
        self,
        filter: Optional[str] = None,
        sort: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> TodoListPage:
        """Filtered, sorted todos plus stats and the active filters echoed back."""
        now = utc_now()
        query = build_list_query(filter, sort, category, priority, now=now)
        todos = await self.store.list(query)
        return TodoListPage(
            title="Todo Manager",
            todos=todos,
            stats=await self.store.stats(now),
            categories=await self.store.categories(),
            current_filter=parse_filter(filter).value,
            current_sort=parse_sort(sort).value,
            current_category=query.category or ALL,
            current_priority=parse_priority(priority) or ALL,
        )

    async def search_page(self, q: Optional[str]) -> Optional[TodoListPage]:
        """Search results page; None when the query is blank."""
        query = build_search_query(q)
        if query is None:
            return None
        todos = await self.store.list(query)
        return TodoListPage(
            title=f'Search Results for "{query.text}"',
            todos=todos,
            stats=await self.store.stats(utc_now()),
            categories=await self.store.categories(),
            search_query=query.text,
        )

    async def get_todo(self, todo_id: Any) -> Todo:
        todo = await self.store.get(todo_id)
        if todo is None:
            raise NotFoundError()
        return todo

    async def create_todo(self, form: TodoForm) -> Todo:
        todo = await self.store.add(new_todo(**form.to_fields()))
        logger.info("Created todo %s (%s)", todo.id, todo.priority)
        return todo

    async def update_todo(self, todo_id: Any, form: TodoForm) -> Todo:
        todo = await self.store.replace(todo_id, form.to_fields())
        if todo is None:
            raise NotFoundError()
        logger.info("Updated todo %s", todo.id)
        return todo

    async def toggle_todo(self, todo_id: Any) -> Todo:
        todo = await self.store.toggle(todo_id)
        if todo is None:
            raise NotFoundError()
        logger.info("Toggled todo %s: completed=%s", todo.id, todo.completed)
        return todo

    async def delete_todo(self, todo_id: Any) -> None:
        if not await self.store.delete(todo_id):
            raise NotFoundError()
        logger.info("Deleted todo %s", todo_id)
