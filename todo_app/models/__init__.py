"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from todo_app.models.todo import Todo

__all__ = ["Todo"]
