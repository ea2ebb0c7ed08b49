"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app / db / redis / logging), read from the
environment (and an optional ``.env`` file), frozen after validation and
cached by the loaders:

    from people_service.core.settings import get_db_settings

    settings = get_db_settings()
    print(settings.backend, settings.pool_size)
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_redis_settings,
)
from .logs import LoggingSettings
from .redis import RedisSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "RedisSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_redis_settings",
]
