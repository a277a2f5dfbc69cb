"""
Todo Pydantic schemas.

``TodoForm`` validates the create/edit form and produces per-field error
messages suitable for showing next to the inputs. ``TodoRead`` is the JSON
shape of a stored todo.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple
from uuid import UUID

from pydantic import AliasGenerator, BaseModel, ConfigDict, ValidationError, computed_field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from todo_app.models.todo import (
    CATEGORY_MAX_LENGTH,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DESCRIPTION_MAX_LENGTH,
    PRIORITIES,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from todo_app.utils import display
from todo_app.utils.time import parse_iso_datetime, utc_now

FORM_FIELDS = ("title", "description", "priority", "category", "due_date", "tags")


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("todo_field", message)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_tags(raw: Any) -> List[str]:
    """Split a comma separated string into trimmed, non-empty tags."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        parts = raw
    else:
        parts = str(raw).split(",")
    return [tag.strip() for tag in parts if isinstance(tag, str) and tag.strip()]


class TodoForm(BaseModel):
    """Validated create/edit input. Every field is replaced on update."""

    title: str
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    category: str = DEFAULT_CATEGORY
    due_date: Optional[datetime] = None
    tags: List[str] = []

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        title = _clean(value)
        if not title:
            raise _invalid("Title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise _invalid(f"Title must be between 1 and {TITLE_MAX_LENGTH} characters")
        return title

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str:
        description = _clean(value)
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise _invalid(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
        return description

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> str:
        priority = _clean(value)
        if not priority:
            return DEFAULT_PRIORITY
        if priority not in PRIORITIES:
            raise _invalid("Priority must be low, medium, or high")
        return priority

    @field_validator("category", mode="before")
    @classmethod
    def _check_category(cls, value: Any) -> str:
        category = _clean(value)
        if len(category) > CATEGORY_MAX_LENGTH:
            raise _invalid(f"Category cannot exceed {CATEGORY_MAX_LENGTH} characters")
        return category or DEFAULT_CATEGORY

    @field_validator("due_date", mode="before")
    @classmethod
    def _check_due_date(cls, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        raw = _clean(value)
        if not raw:
            return None
        try:
            return parse_iso_datetime(raw)
        except (ValueError, OverflowError):
            raise _invalid("Due date must be a valid date")

    @field_validator("tags", mode="before")
    @classmethod
    def _check_tags(cls, value: Any) -> List[str]:
        tags = parse_tags(value)
        for tag in tags:
            if len(tag) > TAG_MAX_LENGTH:
                raise _invalid(f"Tag cannot exceed {TAG_MAX_LENGTH} characters")
        return tags

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump()


def validate_todo_form(raw: Mapping[str, Any]) -> Tuple[Optional[TodoForm], Dict[str, str]]:
    """
    Validate submitted form values.

    Returns ``(form, {})`` on success and ``(None, errors)`` otherwise, where
    ``errors`` maps a field name to its first error message.
    """
    data = {field: raw.get(field) for field in FORM_FIELDS}
    try:
        return TodoForm.model_validate(data), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(field, error["msg"])
        return None, errors


class TodoRead(BaseModel):
    """Schema for reading todo data (API response)."""

    id: UUID
    title: str
    description: str = ""
    completed: bool
    priority: str
    category: str
    due_date: Optional[datetime] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    # read by attribute name, written in camelCase (dueDate, createdAt, isOverdue)
    model_config = ConfigDict(from_attributes=True, alias_generator=AliasGenerator(serialization_alias=to_camel))

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return display.is_overdue(self, utc_now())


class TodoStats(BaseModel):
    """Counts shown in the dashboard header."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completion_rate: int = 0
