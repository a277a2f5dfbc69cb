"""
Seed demo todos for UI exploration.

Run after migrations. Existing todos are removed first.

Usage:
    python scripts/seed_demo_data.py
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from todo_app.core.config import settings
from todo_app.db.session import Database
from todo_app.models.todo import Todo, new_todo, set_completed
from todo_app.utils.time import utc_now


def demo_todos():
    now = utc_now()
    exercise = new_todo(
        title="Exercise routine",
        description="30-minute workout session - cardio and strength training",
        category="Health",
        priority="medium",
        due_date=now + timedelta(hours=1),
        tags=["fitness", "health", "routine"],
        now=now,
    )
    set_completed(exercise, True, now)

    return [
        new_todo(
            title="Complete project presentation",
            description="Prepare slides and practice presentation for the quarterly review meeting",
            category="Work",
            priority="high",
            due_date=now + timedelta(days=3),
            tags=["presentation", "meeting", "work"],
            now=now,
        ),
        new_todo(
            title="Buy groceries",
            description="Get vegetables, fruits, milk, and bread from the supermarket",
            category="Personal",
            priority="medium",
            due_date=now + timedelta(days=1),
            tags=["shopping", "food"],
            now=now,
        ),
        new_todo(
            title="Read 'The Clean Code' book",
            description="Finish reading chapters 5-8 of Clean Code by Robert Martin",
            category="Learning",
            priority="low",
            due_date=now + timedelta(days=7),
            tags=["reading", "programming", "education"],
            now=now,
        ),
        exercise,
        new_todo(
            title="Plan weekend trip",
            description="Research destinations, book accommodation, and plan activities for weekend getaway",
            category="Personal",
            priority="low",
            due_date=now + timedelta(days=5),
            tags=["travel", "planning", "vacation"],
            now=now,
        ),
    ]


async def main() -> None:
    database = Database(settings.DATABASE_URL, connect_timeout=settings.DB_CONNECT_TIMEOUT_SECONDS)
    try:
        async with database.session() as db:
            result = await db.execute(delete(Todo))
            print(f"Removed {result.rowcount} existing todos")

            todos = demo_todos()
            db.add_all(todos)

        print(f"Added {len(todos)} demo todos:")
        for todo in todos:
            status = "done" if todo.completed else "pending"
            print(f"  - {todo.title} [{todo.priority}, {todo.category}, {status}]")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
