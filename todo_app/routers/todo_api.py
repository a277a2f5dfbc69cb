"""
Todo router - JSON endpoints for todos.
"""

from fastapi import APIRouter, Depends

from todo_app.core.dependencies import get_todo_service
from todo_app.schemas.todo import TodoRead
from todo_app.services.todo_service import TodoService

router = APIRouter(tags=["todos"])


@router.get("/todos/{todo_id}/api", response_model=TodoRead)
async def get_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
):
    """Get a single todo by ID."""
    todo = await service.get_todo(todo_id)
    return TodoRead.model_validate(todo)
