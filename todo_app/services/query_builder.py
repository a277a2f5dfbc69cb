"""
Translate list/search request parameters into a storage-agnostic query.

The builder never rejects input: unknown filter, sort or priority values
fall back to "no constraint" or the default ordering. Each store turns a
``TodoQuery`` into its own form (SQL clauses or a Python predicate).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional

from todo_app.models.todo import PRIORITIES
from todo_app.utils.time import as_utc, utc_now

ALL = "all"


class ListFilter(str, Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    DUE = "due"
    PRIORITY = "priority"
    ALPHABETICAL = "alphabetical"


SORT_ALIASES = {"dueDate": SortKey.DUE, "due_date": SortKey.DUE}

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


@dataclass(frozen=True)
class TodoQuery:
    """Conjunction of optional constraints plus one ordering rule."""

    completed: Optional[bool] = None
    due_before: Optional[datetime] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    text: Optional[str] = None
    sort: SortKey = SortKey.NEWEST

    def matches(self, todo: Any) -> bool:
        if self.completed is not None and todo.completed != self.completed:
            return False
        if self.due_before is not None:
            if todo.due_date is None or as_utc(todo.due_date) >= self.due_before:
                return False
        if self.category is not None and todo.category != self.category:
            return False
        if self.priority is not None and todo.priority != self.priority:
            return False
        if self.text is not None and not _matches_text(todo, self.text):
            return False
        return True

    def order(self, todos: Iterable[Any]) -> List[Any]:
        """Sort in Python; mirrors the SQL ``ORDER BY`` of the database store."""
        newest_first = sorted(todos, key=lambda t: as_utc(t.created_at), reverse=True)
        if self.sort is SortKey.OLDEST:
            return newest_first[::-1]
        if self.sort is SortKey.DUE:
            # stable sort keeps newest-first among equal due dates
            return sorted(
                newest_first,
                key=lambda t: (t.due_date is None, as_utc(t.due_date) if t.due_date else datetime.min),
            )
        if self.sort is SortKey.PRIORITY:
            return sorted(newest_first, key=lambda t: PRIORITY_RANK.get(t.priority, len(PRIORITY_RANK)))
        if self.sort is SortKey.ALPHABETICAL:
            return sorted(newest_first, key=lambda t: t.title.casefold())
        return newest_first


def _matches_text(todo: Any, text: str) -> bool:
    needle = text.casefold()
    haystack = [todo.title, todo.description or "", todo.category, *(todo.tags or [])]
    return any(needle in value.casefold() for value in haystack)


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_filter(value: Optional[str]) -> ListFilter:
    try:
        return ListFilter(_normalize(value) or ALL)
    except ValueError:
        return ListFilter.ALL


def parse_sort(value: Optional[str]) -> SortKey:
    value = _normalize(value)
    if value is None:
        return SortKey.NEWEST
    if value in SORT_ALIASES:
        return SORT_ALIASES[value]
    try:
        return SortKey(value)
    except ValueError:
        return SortKey.NEWEST


def parse_category(value: Optional[str]) -> Optional[str]:
    value = _normalize(value)
    return None if value in (None, ALL) else value


def parse_priority(value: Optional[str]) -> Optional[str]:
    value = _normalize(value)
    return value if value in PRIORITIES else None


def build_list_query(
    filter: Optional[str] = None,
    sort: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TodoQuery:
    list_filter = parse_filter(filter)
    completed: Optional[bool] = None
    due_before: Optional[datetime] = None

    if list_filter is ListFilter.COMPLETED:
        completed = True
    elif list_filter is ListFilter.PENDING:
        completed = False
    elif list_filter is ListFilter.OVERDUE:
        completed = False
        due_before = now or utc_now()

    return TodoQuery(
        completed=completed,
        due_before=due_before,
        category=parse_category(category),
        priority=parse_priority(priority),
        sort=parse_sort(sort),
    )


def build_search_query(q: Optional[str]) -> Optional[TodoQuery]:
    """Substring search over title, description, category and tags; None when blank."""
    text = _normalize(q)
    if text is None:
        return None
    return TodoQuery(text=text, sort=SortKey.NEWEST)
