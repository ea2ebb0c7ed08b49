"""Pytest configuration and shared fixtures.

Organization:
    - Cache Fixtures: in-memory Redis double with failure switches
    - Storage Fixtures: in-memory SQLite person store
    - Application Fixtures: FastAPI app wired to the doubles, HTTP client
    - Data Fixtures: person factory
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from typing import Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from people_service.core.dependencies import AppContext
from people_service.core.settings import AppSettings, RedisSettings
from people_service.features.people.models import Person
from people_service.infra.cache import RecordCache, RedisCache
from people_service.infra.database import SQLitePersonStore

# ============================================================================
# Cache Fixtures
# ============================================================================


class FakeRedis:
    """In-memory stand-in for ``redis.asyncio.Redis`` (string values only)."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.expirations: dict[str, int | None] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.fail_ping = False
        self.closed = False

    async def ping(self) -> bool:
        if self.fail_ping:
            msg = "Redis is down"
            raise RedisConnectionError(msg)
        return True

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            msg = "read failed"
            raise RedisConnectionError(msg)
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        if self.fail_writes:
            msg = "write failed"
            raise RedisConnectionError(msg)
        self.data[key] = value
        self.expirations[key] = ex
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Fresh in-memory Redis double."""
    return FakeRedis()


@pytest.fixture
def redis_cache(fake_redis: FakeRedis) -> RedisCache:
    """RedisCache wired to the in-memory double (no connect needed)."""
    return RedisCache(RedisSettings(), client=fake_redis)  # type: ignore[arg-type]


@pytest.fixture
def record_cache(redis_cache: RedisCache) -> RecordCache:
    return RecordCache(redis_cache)


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
async def store() -> AsyncGenerator[SQLitePersonStore, None]:
    """Person store over a private in-memory SQLite database."""
    person_store = SQLitePersonStore.from_path(":memory:")
    await person_store.ensure_schema()
    try:
        yield person_store
    finally:
        await person_store.close()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def context(
    store: SQLitePersonStore,
    record_cache: RecordCache,
) -> AsyncGenerator[AppContext, None]:
    app_context = AppContext(store=store, cache=record_cache)
    try:
        yield app_context
    finally:
        await app_context.close()


@pytest.fixture
def app(context: AppContext):
    """FastAPI application using the in-memory store and cache."""
    from people_service.app.main import create_app

    return create_app(AppSettings(), context=context)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_person() -> Callable[..., Person]:
    """Build unsaved Person instances with sensible defaults."""

    def _make(**overrides: Any) -> Person:
        values: dict[str, Any] = {
            "uid": uuid4(),
            "name": "John Doe",
            "nickname": "johnd",
            "birthdate": date(1990, 1, 1),
            "stack": ["python"],
        }
        values.update(overrides)
        return Person(**values)

    return _make


@pytest.fixture
def seed_people(
    store: SQLitePersonStore,
    make_person: Callable[..., Person],
) -> Callable[..., Awaitable[list[Person]]]:
    """Insert ``count`` people named ``<prefix> <n>`` and return them in insert order."""

    async def _seed(count: int, prefix: str = "Dev") -> list[Person]:
        people = []
        for n in range(1, count + 1):
            person = make_person(name=f"{prefix} {n}", nickname=f"{prefix.lower()}{n}")
            await store.create(person)
            people.append(person)
        return people

    return _seed
