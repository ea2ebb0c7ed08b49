"""Request ID middleware for per-request log correlation.

This middleware:
1. Takes the request ID from the X-Request-ID header, or generates a UUID
2. Stores it in ``request.state.request_id``
3. Adds it (with method and path) to the logging context
4. Echoes it in the X-Request-ID response header
5. Clears the logging context when the request completes

Pure ASGI implementation, no BaseHTTPMiddleware.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import uuid

from starlette.datastructures import MutableHeaders

from people_service.infra.logging.context import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

HEADER_NAME = "x-request-id"
MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware:
    """Attach a request id to every HTTP request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._extract(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id, method=scope["method"], path=scope["path"])

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(HEADER_NAME, request_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()

    @staticmethod
    def _extract(scope: Scope) -> str | None:
        for name, value in scope.get("headers", []):
            if name == HEADER_NAME.encode("latin-1"):
                candidate = value.decode("latin-1").strip()
                if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH:
                    return candidate
        return None
