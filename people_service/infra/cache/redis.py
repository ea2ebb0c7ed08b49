"""Async Redis client with connection pooling.

``RedisCache`` owns a ``redis.asyncio`` connection pool built from
``RedisSettings``. Values are plain strings (``decode_responses``).

Example:
    cache = RedisCache(get_redis_settings())
    await cache.connect()
    await cache.set("key", "value")
    value = await cache.get("key")
    await cache.disconnect()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from redis.asyncio import ConnectionPool, Redis

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from people_service.core.settings import RedisSettings

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis client wrapper.

    Args:
        settings: Connection and pool settings.
        client: Pre-built client (tests, shared pools). When given,
            ``connect`` only verifies it with a PING.
    """

    def __init__(self, settings: RedisSettings, client: Redis | None = None) -> None:
        self.settings = settings
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = client

    async def connect(self) -> None:
        """Create the connection pool and PING the server.

        Raises:
            redis.exceptions.RedisError: If the server cannot be reached.
        """
        logger.info(
            "Connecting to Redis",
            extra={
                "host": self.settings.host,
                "port": self.settings.port,
                "db": self.settings.db,
                "max_connections": self.settings.max_connections,
            },
        )

        if self._client is None:
            self._pool = ConnectionPool.from_url(
                self.settings.url,
                **self.settings.connection_pool_kwargs(),
            )
            self._client = Redis(connection_pool=self._pool)

        try:
            await cast("Awaitable[bool]", self._client.ping())
        except Exception as e:
            logger.exception("Failed to connect to Redis", extra={"error": str(e)})
            raise

        logger.info("Redis connection established")

    async def disconnect(self) -> None:
        """Close the client and its pool."""
        if self._client is not None:
            await cast("Any", self._client).aclose()
            self._client = None

        if self._pool is not None:
            await cast("Any", self._pool).aclose()
            self._pool = None

        logger.info("Redis connection closed")

    @property
    def client(self) -> Redis:
        """Connected client.

        Raises:
            RuntimeError: If ``connect`` was not called.
        """
        if self._client is None:
            msg = "Redis client not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def get(self, key: str) -> str | None:
        """Raw value stored at ``key``, None when absent."""
        return cast("str | None", await self.client.get(key))

    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` at ``key``, without expiration."""
        return bool(await self.client.set(key, value))

    async def health_check(self) -> bool:
        """True if the server answers PING."""
        try:
            await cast("Awaitable[bool]", self.client.ping())
        except Exception as e:
            logger.warning("Redis health check failed", extra={"error": str(e)})
            return False
        return True


__all__ = ["RedisCache"]
