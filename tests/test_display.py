from datetime import datetime, timedelta, timezone

import pytest

from todo_app.models.todo import new_todo, set_completed
from todo_app.schemas.todo import TodoRead
from todo_app.utils.display import due_date_input_value, format_created_at, format_due_date, is_overdue

pytestmark = pytest.mark.unit

NOW = datetime(2026, 10, 18, 13, 37, tzinfo=timezone.utc)


def test_overdue_only_when_pending_and_past_due():
    late = new_todo(title="late", due_date=NOW - timedelta(minutes=1))
    future = new_todo(title="future", due_date=NOW + timedelta(minutes=1))
    undated = new_todo(title="undated")
    done = new_todo(title="done", due_date=NOW - timedelta(days=3))
    set_completed(done, True)

    assert is_overdue(late, NOW) is True
    assert is_overdue(future, NOW) is False
    assert is_overdue(undated, NOW) is False
    assert is_overdue(done, NOW) is False


def test_formatted_dates():
    todo = new_todo(title="t", due_date=datetime(2026, 11, 5, tzinfo=timezone.utc), now=NOW)

    assert format_created_at(todo) == "Oct 18, 2026, 01:37 PM"
    assert format_due_date(todo) == "Nov 5, 2026"
    assert due_date_input_value(todo) == "2026-11-05"


def test_missing_due_date_formats_as_empty():
    todo = new_todo(title="t")

    assert format_due_date(todo) is None
    assert due_date_input_value(todo) == ""


def test_read_schema_exposes_overdue_flag():
    todo = new_todo(title="late", due_date=datetime(2000, 1, 1, tzinfo=timezone.utc))

    payload = TodoRead.model_validate(todo).model_dump()

    assert payload["is_overdue"] is True
    assert payload["completed_at"] is None
