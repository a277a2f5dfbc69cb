"""
Todo repository - database operations for Todo.

Every public method runs in its own session and is a single atomic
store call. Driver and connection failures are re-raised as
``StorageError`` so route handlers can answer with a generic 500.
"""

import functools
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, case, delete, distinct, func, literal, or_, select, text
from sqlalchemy.exc import SQLAlchemyError

from todo_app.db.session import Database
from todo_app.errors import StorageError
from todo_app.models.todo import Todo, set_completed
from todo_app.repositories.base import TodoStore, parse_todo_id
from todo_app.schemas.todo import TodoStats
from todo_app.services.query_builder import SortKey, TodoQuery
from todo_app.services.stats import build_stats

logger = logging.getLogger(__name__)


def _storage_call(operation: str):
    """Wrap driver errors from a repository coroutine in ``StorageError``."""

    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.error("Todo %s failed: %s", operation, exc)
                raise StorageError(f"Error {operation} todo") from exc
            except OSError as exc:
                logger.error("Todo %s failed, database unreachable: %s", operation, exc)
                raise StorageError(f"Error {operation} todo") from exc

        return wrapper

    return decorator


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def apply_query(stmt: Select, query: TodoQuery) -> Select:
    """Add the WHERE and ORDER BY clauses for ``query`` to ``stmt``."""
    if query.completed is not None:
        stmt = stmt.where(Todo.completed.is_(query.completed))
    if query.due_before is not None:
        stmt = stmt.where(Todo.due_date.is_not(None), Todo.due_date < query.due_before)
    if query.category is not None:
        stmt = stmt.where(Todo.category == query.category)
    if query.priority is not None:
        stmt = stmt.where(Todo.priority == query.priority)
    if query.text is not None:
        pattern = _like_pattern(query.text)
        tag = func.jsonb_array_elements_text(Todo.tags).table_valued("value")
        tag_match = select(literal(1)).select_from(tag).where(tag.c.value.ilike(pattern, escape="\\")).exists()
        stmt = stmt.where(
            or_(
                Todo.title.ilike(pattern, escape="\\"),
                Todo.description.ilike(pattern, escape="\\"),
                Todo.category.ilike(pattern, escape="\\"),
                tag_match,
            )
        )

    if query.sort is SortKey.OLDEST:
        return stmt.order_by(Todo.created_at.asc())
    if query.sort is SortKey.DUE:
        return stmt.order_by(Todo.due_date.asc().nullslast(), Todo.created_at.desc())
    if query.sort is SortKey.PRIORITY:
        rank = case(
            (Todo.priority == "high", 0),
            (Todo.priority == "medium", 1),
            (Todo.priority == "low", 2),
            else_=3,
        )
        return stmt.order_by(rank, Todo.created_at.desc())
    if query.sort is SortKey.ALPHABETICAL:
        return stmt.order_by(func.lower(Todo.title).asc(), Todo.created_at.desc())
    return stmt.order_by(Todo.created_at.desc())


class TodoRepository(TodoStore):
    """Repository for Todo database operations."""

    backend = "sql"

    def __init__(self, database: Database):
        self.database = database

    @property
    def state(self) -> str:
        return self.database.state

    async def connect(self) -> None:
        await self.database.connect()

    async def close(self) -> None:
        await self.database.dispose()

    async def ping(self) -> bool:
        return await self.database.ping()

    async def schema_revision(self) -> Optional[str]:
        try:
            async with self.database.session() as db:
                result = await db.execute(text("SELECT version_num FROM alembic_version"))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError, StorageError):
            return None

    @_storage_call("listing")
    async def list(self, query: TodoQuery) -> List[Todo]:
        async with self.database.session() as db:
            result = await db.execute(apply_query(select(Todo), query))
            return list(result.scalars().all())

    @_storage_call("fetching")
    async def get(self, todo_id: Any) -> Optional[Todo]:
        key = parse_todo_id(todo_id)
        if key is None:
            return None
        async with self.database.session() as db:
            return await db.get(Todo, key)

    @_storage_call("creating")
    async def add(self, todo: Todo) -> Todo:
        async with self.database.session() as db:
            db.add(todo)
            await db.flush()
            await db.refresh(todo)
        return todo

    @_storage_call("updating")
    async def replace(self, todo_id: Any, fields: Dict[str, Any]) -> Optional[Todo]:
        key = parse_todo_id(todo_id)
        if key is None:
            return None
        async with self.database.session() as db:
            todo = await db.get(Todo, key)
            if todo is None:
                return None
            for field, value in fields.items():
                setattr(todo, field, value)
            await db.flush()
            await db.refresh(todo)
        return todo

    @_storage_call("updating")
    async def toggle(self, todo_id: Any) -> Optional[Todo]:
        key = parse_todo_id(todo_id)
        if key is None:
            return None
        async with self.database.session() as db:
            todo = await db.get(Todo, key)
            if todo is None:
                return None
            set_completed(todo, not todo.completed)
            await db.flush()
            await db.refresh(todo)
        return todo

    @_storage_call("deleting")
    async def delete(self, todo_id: Any) -> bool:
        key = parse_todo_id(todo_id)
        if key is None:
            return False
        async with self.database.session() as db:
            result = await db.execute(delete(Todo).where(Todo.id == key))
            return result.rowcount > 0

    @_storage_call("counting")
    async def stats(self, now: datetime) -> TodoStats:
        async with self.database.session() as db:
            total = await db.scalar(select(func.count()).select_from(Todo))
            completed = await db.scalar(select(func.count()).select_from(Todo).where(Todo.completed.is_(True)))
            overdue = await db.scalar(
                select(func.count())
                .select_from(Todo)
                .where(Todo.completed.is_(False), Todo.due_date.is_not(None), Todo.due_date < now)
            )
        return build_stats(total or 0, completed or 0, overdue or 0)

    @_storage_call("listing categories for")
    async def categories(self) -> List[str]:
        async with self.database.session() as db:
            result = await db.execute(select(distinct(Todo.category)).order_by(Todo.category))
            return [row for row in result.scalars().all()]
