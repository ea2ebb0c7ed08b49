"""Redis-backed caching for person records."""

from __future__ import annotations

from people_service.infra.cache.records import RecordCache
from people_service.infra.cache.redis import RedisCache

__all__ = ["RecordCache", "RedisCache"]
