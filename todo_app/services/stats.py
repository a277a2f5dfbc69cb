"""Dashboard statistics."""

from todo_app.schemas.todo import TodoStats


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed todos, rounded half up; 0 for an empty list."""
    if total <= 0:
        return 0
    # integer form of floor(100 * completed / total + 0.5)
    return (200 * completed + total) // (2 * total)


def build_stats(total: int, completed: int, overdue: int) -> TodoStats:
    return TodoStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        completion_rate=completion_rate(completed, total),
    )
