"""ASGI middleware."""

from urllib.parse import parse_qs

from starlette.types import ASGIApp, Receive, Scope, Send

OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware:
    """
    Let HTML forms reach PUT/PATCH/DELETE routes.

    A ``POST /todos/<id>?_method=DELETE`` is dispatched as ``DELETE
    /todos/<id>``. Only POST requests are rewritten, and only to one of
    ``OVERRIDABLE_METHODS``.
    """

    def __init__(self, app: ASGIApp, param: str = "_method"):
        self.app = app
        self.param = param

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            query = parse_qs(scope.get("query_string", b"").decode("latin-1"))
            override = query.get(self.param, [""])[0].upper()
            if override in OVERRIDABLE_METHODS:
                scope = dict(scope, method=override)
        await self.app(scope, receive, send)
