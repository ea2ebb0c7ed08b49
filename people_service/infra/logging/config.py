"""Logging configuration setup.

Configures the stdlib logging tree through ``logging.config.dictConfig``:

- handlers (console, optional rotating file) attached to the root logger,
  child loggers propagate;
- JSON Lines output for machine parsing, or a plain text format;
- ``ContextInjectingFilter`` on every handler for request context.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from people_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_LOGGING_INITIALIZED = False


def setup_logging(log_settings: LoggingSettings | None = None, *, force: bool = False) -> None:
    """Configure logging once across entrypoints.

    Args:
        log_settings: Logging settings; loaded from the environment if omitted.
        force: Reconfigure even if logging was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from people_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**log_settings.to_logging_kwargs())
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "people-service",
    include_uvicorn: bool = True,
) -> dict[str, Any]:
    """Apply the logging configuration.

    Args:
        log_level: Root logger level.
        json_logs: Emit JSON Lines instead of plain text.
        console_enabled: Log to stderr.
        file_path: Rotating log file, None disables file logging.
        file_max_bytes: Size at which the log file rotates.
        file_backup_count: Number of rotated files kept.
        service_name: Static ``service`` field of JSON records.
        include_uvicorn: Route uvicorn loggers through the root handlers.

    Returns:
        The dictConfig mapping that was applied.
    """
    config = build_logging_config(
        log_level=log_level,
        json_logs=json_logs,
        console_enabled=console_enabled,
        file_path=Path(file_path) if file_path else None,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
        service_name=service_name,
        include_uvicorn=include_uvicorn,
    )
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.captureWarnings(True)
    logging.config.dictConfig(config)
    logger.debug("Logging configured", extra={"handlers": list(config["handlers"])})
    return config


def build_logging_config(
    *,
    log_level: str,
    json_logs: bool,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
    service_name: str,
    include_uvicorn: bool,
) -> dict[str, Any]:
    """Build the dictConfig mapping without applying it."""
    formatter = "json" if json_logs else "text"
    formatters: dict[str, Any] = {
        "json": {
            "()": "people_service.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        },
        "text": {"format": _TEXT_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "filters": ["context"],
        }
    if file_path:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(file_path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
            "formatter": formatter,
            "filters": ["context"],
        }

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": {
            "context": {"()": "people_service.infra.logging.context.ContextInjectingFilter"},
        },
        "handlers": handlers,
        "root": {"level": log_level.upper(), "handlers": list(handlers)},
        "loggers": {},
    }

    if include_uvicorn:
        # uvicorn installs its own handlers; hand its records to the root instead
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            config["loggers"][name] = {"handlers": [], "propagate": True}

    return config


__all__ = ["build_logging_config", "configure_logging", "setup_logging"]
