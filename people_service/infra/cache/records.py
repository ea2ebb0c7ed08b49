"""Write-through cache of serialized person records.

Keys are the record uid (plus the configured prefix); values are the exact
JSON document returned by ``GET /pessoas/{id}``. Entries never expire: the
cache is a non-authoritative copy of storage, repopulated on demand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from people_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from people_service.infra.cache.redis import RedisCache

_lazy = get_lazy_logger(__name__)


class RecordCache:
    """Record cache keyed by uid.

    Errors from Redis propagate to the caller, which decides whether they
    are fatal (writes) or recoverable (reads).
    """

    def __init__(self, cache: RedisCache, key_prefix: str = "") -> None:
        self.cache = cache
        self.key_prefix = key_prefix

    def key(self, uid: str) -> str:
        return f"{self.key_prefix}{uid}"

    async def put(self, uid: str, payload: str) -> None:
        """Store the serialized record, without expiration."""
        await self.cache.set(self.key(uid), payload)
        _lazy.debug(lambda: f"cache.put: {uid} ({len(payload)} bytes)")

    async def get(self, uid: str) -> str | None:
        """Serialized record, or None on a miss."""
        payload = await self.cache.get(self.key(uid))
        _lazy.debug(lambda: f"cache.get: {uid} -> {'hit' if payload is not None else 'miss'}")
        return payload

    async def health_check(self) -> bool:
        return await self.cache.health_check()

    async def close(self) -> None:
        await self.cache.disconnect()


__all__ = ["RecordCache"]
