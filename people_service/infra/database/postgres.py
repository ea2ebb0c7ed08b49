"""PostgreSQL person store (SQLAlchemy async + psycopg3)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import create_async_engine

from people_service.infra.database.statements import PostgresStatementBuilder
from people_service.infra.database.store import SQLAlchemyPersonStore

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from people_service.core.settings import DatabaseSettings


class PostgresPersonStore(SQLAlchemyPersonStore):
    """Production backend.

    The engine keeps ``pool_size`` connections and bursts up to
    ``pool_size + max_overflow`` (5 + 25 by default).
    """

    backend = "postgres"

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(engine, PostgresStatementBuilder(), clock=clock)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> PostgresPersonStore:
        engine = create_async_engine(
            settings.postgres_url,
            echo=settings.echo,
            **settings.pool_kwargs(),
        )
        return cls(engine)
