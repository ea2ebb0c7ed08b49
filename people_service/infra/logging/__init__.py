"""Structured logging: dictConfig setup, JSON Lines output, request context.

Usage:
    from people_service.infra.logging import setup_logging, set_log_context

    setup_logging()
    set_log_context(request_id="abc-123")
    logging.getLogger(__name__).info("Person created", extra={"uid": uid})
"""

from __future__ import annotations

from people_service.infra.logging.config import (
    build_logging_config,
    configure_logging,
    setup_logging,
)
from people_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from people_service.infra.logging.formatters import JSONFormatter
from people_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "build_logging_config",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
]
