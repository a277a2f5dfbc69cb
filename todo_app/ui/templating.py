"""Shared Jinja2 environment for the UI routes."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from todo_app.utils.display import due_date_input_value, format_created_at, format_due_date, is_overdue

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["is_overdue"] = is_overdue
templates.env.filters["created_at_display"] = format_created_at
templates.env.filters["due_date_display"] = format_due_date
templates.env.filters["due_date_input"] = due_date_input_value
