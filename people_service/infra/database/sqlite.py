"""Embedded SQLite person store (SQLAlchemy async + aiosqlite)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from people_service.infra.database.statements import SQLiteStatementBuilder
from people_service.infra.database.store import SQLAlchemyPersonStore

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from people_service.core.settings import DatabaseSettings

MEMORY_PATH = ":memory:"
URL_PREFIX = "sqlite+aiosqlite:///"


class SQLitePersonStore(SQLAlchemyPersonStore):
    """Embedded backend for local runs and tests."""

    backend = "sqlite"

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(engine, SQLiteStatementBuilder(), clock=clock)

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        echo: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> SQLitePersonStore:
        """Open the database named by a ``sqlite+aiosqlite`` URL.

        An in-memory database lives as long as its single connection, so it
        is served from a static pool.
        """
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if url.endswith(MEMORY_PATH):
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        engine = create_async_engine(url, **engine_kwargs)
        return cls(engine, clock=clock)

    @classmethod
    def from_path(
        cls,
        path: str = MEMORY_PATH,
        *,
        echo: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> SQLitePersonStore:
        """Open a database file, or a private in-memory database."""
        return cls.from_url(f"{URL_PREFIX}{path}", echo=echo, clock=clock)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> SQLitePersonStore:
        return cls.from_url(settings.sqlite_url, echo=settings.echo)
