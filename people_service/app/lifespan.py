"""Application lifespan: build the shared resources, release them at shutdown.

Startup order:
1. logging
2. storage backend (engine + idempotent schema creation)
3. Redis record cache (fatal if unreachable unless
   ``REDIS_STARTUP_REQUIRE_CACHE=false``)

The resulting ``AppContext`` is kept on ``app.state.context``. An
application created with a prebuilt context (tests) keeps it and leaves its
lifecycle to the caller.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from people_service.core.dependencies import AppContext
from people_service.core.settings import (
    get_db_settings,
    get_logging_settings,
    get_redis_settings,
)
from people_service.infra.cache import RecordCache, RedisCache
from people_service.infra.database import create_person_store
from people_service.infra.logging import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI
    from redis.asyncio import Redis

    from people_service.core.settings import DatabaseSettings, RedisSettings

logger = logging.getLogger(__name__)


async def startup_cache(settings: RedisSettings, client: Redis | None = None) -> RecordCache:
    """Connect the record cache.

    Raises:
        RedisError: If Redis is unreachable and the cache is required.
    """
    redis_cache = RedisCache(settings, client=client)
    try:
        await redis_cache.connect()
    except (RedisError, OSError) as e:
        if settings.startup_require_cache:
            raise
        logger.warning(
            "Redis unavailable at startup, continuing without a warm connection",
            extra={"error": str(e)},
        )
    return RecordCache(redis_cache, key_prefix=settings.key_prefix)


async def build_app_context(
    db_settings: DatabaseSettings,
    redis_settings: RedisSettings,
    *,
    redis_client: Redis | None = None,
) -> AppContext:
    """Create the store and the cache; the store is closed again on failure."""
    store = create_person_store(db_settings)
    try:
        await store.ensure_schema()
        cache = await startup_cache(redis_settings, client=redis_client)
    except BaseException:
        await store.close()
        raise
    return AppContext(store=store, cache=cache)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown of the application resources."""
    setup_logging(get_logging_settings())

    if getattr(app.state, "context", None) is not None:
        logger.info("Using preconfigured application context")
        yield
        return

    context = await build_app_context(get_db_settings(), get_redis_settings())
    app.state.context = context
    logger.info(
        "Application started",
        extra={"service": app.title, "backend": context.store.backend},
    )

    try:
        yield
    finally:
        logger.info("Application shutting down")
        app.state.context = None
        await context.close()
