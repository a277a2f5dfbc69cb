"""
Todo routes for UI.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from todo_app.core.dependencies import get_todo_service
from todo_app.errors import wants_json
from todo_app.models.todo import Todo
from todo_app.schemas.todo import validate_todo_form
from todo_app.services.todo_service import TodoListPage, TodoService
from todo_app.ui.templating import templates
from todo_app.utils.display import due_date_input_value

router = APIRouter(tags=["ui-todos"])


def _list_url(**params: str) -> str:
    return f"/todos?{urlencode(params)}" if params else "/todos"


def _form_values(todo: Todo) -> Dict[str, Any]:
    return {
        "title": todo.title,
        "description": todo.description,
        "priority": todo.priority,
        "category": todo.category,
        "due_date": due_date_input_value(todo),
        "tags": ", ".join(todo.tags or []),
    }


def _render_list(
    request: Request,
    page: TodoListPage,
    message: Optional[str] = None,
    error: Optional[str] = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "todos/index.html",
        {
            "title": page.title,
            "page": page,
            "todos": page.todos,
            "stats": page.stats,
            "categories": page.categories,
            "message": message,
            "error": error,
        },
    )


def _render_form(
    request: Request,
    mode: str,
    values: Dict[str, Any],
    errors: Optional[Dict[str, str]] = None,
    todo: Optional[Todo] = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "todos/form.html",
        {
            "title": "Create New Todo" if mode == "create" else "Edit Todo",
            "mode": mode,
            "todo": todo,
            "values": values,
            "errors": errors or {},
        },
    )


@router.get("/todos", response_class=HTMLResponse)
async def todos_page(
    request: Request,
    filter: Optional[str] = None,
    sort: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    service: TodoService = Depends(get_todo_service),
):
    """Todo list with filters, sorting and stats"""
    page = await service.list_page(filter=filter, sort=sort, category=category, priority=priority)
    return _render_list(request, page, message=message, error=error)


@router.get("/todos/search", response_class=HTMLResponse)
async def search_todos(
    request: Request,
    q: Optional[str] = None,
    service: TodoService = Depends(get_todo_service),
):
    """Free-text search; a blank query goes back to the full list"""
    page = await service.search_page(q)
    if page is None:
        return RedirectResponse(url="/todos", status_code=303)
    return _render_list(request, page)


@router.get("/todos/new", response_class=HTMLResponse)
async def todo_create_form(request: Request):
    return _render_form(request, "create", values={})


@router.post("/todos")
async def todo_create(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    priority: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    service: TodoService = Depends(get_todo_service),
):
    """Handle todo create form submission"""
    submitted = {
        "title": title,
        "description": description,
        "priority": priority,
        "category": category,
        "due_date": due_date,
        "tags": tags,
    }
    form, errors = validate_todo_form(submitted)
    if form is None:
        return _render_form(request, "create", values=submitted, errors=errors)

    await service.create_todo(form)
    return RedirectResponse(url=_list_url(message="Todo created successfully"), status_code=303)


@router.get("/todos/{todo_id}/edit", response_class=HTMLResponse)
async def todo_edit_form(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.get_todo(todo_id)
    return _render_form(request, "edit", values=_form_values(todo), todo=todo)


@router.put("/todos/{todo_id}")
async def todo_update(
    request: Request,
    todo_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    priority: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    due_date: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    service: TodoService = Depends(get_todo_service),
):
    """Handle todo edit form submission (full replace)"""
    todo = await service.get_todo(todo_id)
    submitted = {
        "title": title,
        "description": description,
        "priority": priority,
        "category": category,
        "due_date": due_date,
        "tags": tags,
    }
    form, errors = validate_todo_form(submitted)
    if form is None:
        values = {**_form_values(todo), **{k: v for k, v in submitted.items() if v is not None}}
        return _render_form(request, "edit", values=values, errors=errors, todo=todo)

    await service.update_todo(todo_id, form)
    return RedirectResponse(url=_list_url(message="Todo updated successfully"), status_code=303)


@router.patch("/todos/{todo_id}/toggle")
async def todo_toggle(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.toggle_todo(todo_id)
    if wants_json(request):
        return JSONResponse(
            {
                "success": True,
                "completed": todo.completed,
                "message": "Todo marked as completed" if todo.completed else "Todo marked as pending",
            }
        )
    return RedirectResponse(url="/todos", status_code=303)


@router.delete("/todos/{todo_id}")
async def todo_delete(
    request: Request,
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
):
    await service.delete_todo(todo_id)
    if wants_json(request):
        return JSONResponse({"success": True, "message": "Todo deleted successfully"})
    return RedirectResponse(url=_list_url(message="Todo deleted successfully"), status_code=303)
