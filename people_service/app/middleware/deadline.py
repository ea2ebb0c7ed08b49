"""Per-request deadline.

Every HTTP request runs under ``asyncio.timeout``; when the deadline
expires the in-flight storage and cache calls are cancelled and the client
receives a 504 problem detail.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.requests import Request

from people_service.app.exception_handlers import app_exception_handler
from people_service.core.exceptions import DeadlineExceededException

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestDeadlineMiddleware:
    """Bound each request by ``timeout`` seconds.

    Args:
        app: The ASGI application to wrap.
        timeout: Deadline in seconds.
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking_start(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            async with asyncio.timeout(self.timeout):
                await self.app(scope, receive, send_tracking_start)
        except TimeoutError:
            logger.warning(
                "Request deadline exceeded",
                extra={"path": scope["path"], "timeout_seconds": self.timeout},
            )
            if response_started:
                # Headers are already out; nothing valid can be sent any more
                return
            request = Request(scope, receive)
            response = await app_exception_handler(
                request,
                DeadlineExceededException(self.timeout, instance=scope["path"]),
            )
            await response(scope, receive, send)
