"""ASGI middleware stack."""

from __future__ import annotations

from typing import TYPE_CHECKING

from people_service.app.middleware.deadline import RequestDeadlineMiddleware
from people_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from people_service.core.settings import AppSettings


def configure_middleware(app: FastAPI, settings: AppSettings) -> None:
    """Install the middleware stack.

    The last middleware added runs first: request ids are assigned before
    the deadline starts, so a 504 still carries its request id.
    """
    app.add_middleware(RequestDeadlineMiddleware, timeout=settings.request_timeout)
    app.add_middleware(RequestIDMiddleware)


__all__ = ["RequestDeadlineMiddleware", "RequestIDMiddleware", "configure_middleware"]
