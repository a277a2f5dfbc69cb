"""
Schemas package.

Import all schemas here for easy access.
"""

from todo_app.schemas.todo import TodoForm, TodoRead, TodoStats, validate_todo_form

__all__ = ["TodoForm", "TodoRead", "TodoStats", "validate_todo_form"]
