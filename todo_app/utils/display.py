"""
Derived, read-time views of a todo.

None of these values are stored; they are recomputed whenever a page is
rendered so they never go stale. Registered as Jinja filters in
``todo_app.ui.templating``.
"""

from datetime import datetime
from typing import Any, Optional

from todo_app.utils.time import as_utc, utc_now


def is_overdue(todo: Any, now: Optional[datetime] = None) -> bool:
    if todo.completed or todo.due_date is None:
        return False
    return as_utc(todo.due_date) < (now or utc_now())


def format_created_at(todo: Any) -> str:
    created = as_utc(todo.created_at)
    return f"{created:%b} {created.day}, {created.year}, {created:%I:%M %p}"


def format_due_date(todo: Any) -> Optional[str]:
    if todo.due_date is None:
        return None
    due = as_utc(todo.due_date)
    return f"{due:%b} {due.day}, {due.year}"


def due_date_input_value(todo: Any) -> str:
    """``YYYY-MM-DD`` for an ``<input type="date">``, empty when unset."""
    due = getattr(todo, "due_date", None)
    if due is None:
        return ""
    if isinstance(due, str):
        return due[:10]
    return as_utc(due).date().isoformat()
