"""Structured errors and the handlers that turn them into responses."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_app.ui.templating import templates

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.payload = build_error_payload(code, message, details)


class NotFoundError(AppError):
    def __init__(self, message: str = "Todo not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(404, "todo_not_found", message, details)


class StorageError(AppError):
    """The store could not be reached or rejected an operation."""

    def __init__(self, message: str = "Storage operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(500, "storage_error", message, details)


def wants_json(request: Request) -> bool:
    """True when the caller declared it accepts a JSON response."""
    return "application/json" in request.headers.get("accept", "")


def _prefers_json(request: Request) -> bool:
    return wants_json(request) or request.url.path == "/health" or request.url.path.endswith("/api")


def _render_error_page(request: Request, status_code: int, title: str, message: str, error: Any = None) -> Response:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "message": message, "error": error},
        status_code=status_code,
    )


async def app_error_handler(request: Request, exc: AppError) -> Response:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )

    if _prefers_json(request):
        return JSONResponse(status_code=exc.status_code, content=exc.payload)

    if exc.status_code == 404:
        return _render_error_page(
            request, 404, "Todo Not Found", "The todo you are looking for does not exist."
        )

    debug = getattr(request.app.state, "debug", False)
    return _render_error_page(
        request,
        exc.status_code,
        "Error",
        "Something went wrong. Please try again later.",
        error=str(exc.__cause__ or exc) if debug else None,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if _prefers_json(request):
        code = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=build_error_payload(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    if exc.status_code == 404:
        return _render_error_page(
            request, 404, "Page Not Found", "The page you are looking for does not exist."
        )
    return _render_error_page(request, exc.status_code, "Error", str(exc.detail))
