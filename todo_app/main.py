"""
Main FastAPI application.

This is the entry point for the web server:

    uvicorn todo_app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_app.core.config import Settings, settings as default_settings
from todo_app.core.dependencies import build_store
from todo_app.core.logging_config import configure_logging
from todo_app.errors import AppError, StorageError, app_error_handler, http_error_handler
from todo_app.middleware import MethodOverrideMiddleware
from todo_app.repositories.base import TodoStore
from todo_app.routers import health, todo_api
from todo_app.ui.routes import todos as ui_todos

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[TodoStore] = None) -> FastAPI:
    """
    Build the application.

    ``store`` overrides the backend selected by ``settings``; tests pass a
    ``MemoryTodoStore`` here.
    """
    settings = settings or default_settings
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        logger.info("Starting %s (%s store)...", settings.APP_NAME, store.backend)
        try:
            await store.connect()
        except StorageError as exc:
            # keep serving; each request retries the connection and fails on its own
            logger.error("Storage unavailable at startup: %s", exc.__cause__ or exc)

        yield

        logger.info("Shutting down %s...", settings.APP_NAME)
        await store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Server-rendered todo manager",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.debug = settings.DEBUG

    app.add_middleware(MethodOverrideMiddleware)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(todo_api.router)
    app.include_router(ui_todos.router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/todos", status_code=303)

    return app


app = create_app()
