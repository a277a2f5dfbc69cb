"""
Todo model.

Represents a single to-do item. Save hooks keep ``updated_at`` and
``completed_at`` consistent on every insert and update, whichever code
path changed the record.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, Text, event, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from todo_app.db.base import Base
from todo_app.utils.time import utc_now

PRIORITIES = ("low", "medium", "high")
DEFAULT_PRIORITY = "medium"
DEFAULT_CATEGORY = "General"

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
TAG_MAX_LENGTH = 30


class Todo(Base):
    """
    Todo table - one row per task.
    """

    __tablename__ = "todo"
    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_todo_priority"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=DEFAULT_PRIORITY,
    )

    category: Mapped[str] = mapped_column(
        String(CATEGORY_MAX_LENGTH),
        nullable=False,
        default=DEFAULT_CATEGORY,
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    tags: Mapped[List[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Todo {self.id} {self.title!r} completed={self.completed}>"


def new_todo(
    *,
    title: str,
    description: str = "",
    priority: str = DEFAULT_PRIORITY,
    category: str = DEFAULT_CATEGORY,
    due_date: Optional[datetime] = None,
    tags: Optional[List[str]] = None,
    now: Optional[datetime] = None,
) -> Todo:
    """Build a fully populated, not yet persisted todo."""
    now = now or utc_now()
    return Todo(
        id=uuid.uuid4(),
        title=title,
        description=description,
        completed=False,
        priority=priority,
        category=category,
        due_date=due_date,
        tags=list(tags or []),
        created_at=now,
        updated_at=now,
        completed_at=None,
    )


def set_completed(todo: Todo, completed: bool, now: Optional[datetime] = None) -> None:
    """Set the completion flag and its timestamp together."""
    todo.completed = completed
    todo.completed_at = (now or utc_now()) if completed else None


def before_save(todo: Todo, now: Optional[datetime] = None) -> None:
    """Stamp ``updated_at`` and reconcile ``completed_at`` with ``completed``."""
    now = now or utc_now()
    todo.updated_at = now
    if todo.completed and todo.completed_at is None:
        todo.completed_at = now
    elif not todo.completed:
        todo.completed_at = None


@event.listens_for(Todo, "before_insert")
@event.listens_for(Todo, "before_update")
def _todo_before_save(mapper, connection, target: Todo) -> None:
    before_save(target)
