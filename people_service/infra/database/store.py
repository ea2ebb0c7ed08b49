"""Person storage backends.

``PersonStore`` is the protocol the service layer depends on.
``SQLAlchemyPersonStore`` implements it over an async SQLAlchemy engine;
the PostgreSQL and SQLite backends only differ in engine construction and
statement builder.

Every call opens its own short-lived session, so one store instance is
safe to share between concurrent requests. Driver errors propagate as
``SQLAlchemyError``; data-level misses raise ``NotFoundError``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import UUID

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from people_service.core.database import Base, NotFoundError
from people_service.features.people.models import Person
from people_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from people_service.core.pagination import PersonQuery
    from people_service.infra.database.statements import PersonStatementBuilder

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


@runtime_checkable
class PersonStore(Protocol):
    """Durable source of truth for person records."""

    backend: str

    async def create(self, person: Person) -> int:
        """Insert ``person`` and return its generated sequence id."""
        ...

    async def get_by_uid(self, uid: str) -> Person:
        """Fetch a person by public id; raises ``NotFoundError``."""
        ...

    async def list(self, query: PersonQuery) -> list[Person]:
        """Execute a composed listing query."""
        ...

    async def count(self) -> int:
        """Total number of stored people."""
        ...

    async def ensure_schema(self) -> None:
        """Create the people table and its indexes if missing."""
        ...

    async def health_check(self) -> bool:
        """True when the backend answers a trivial query."""
        ...

    async def close(self) -> None:
        """Release every pooled connection."""
        ...


class SQLAlchemyPersonStore:
    """Person store over an async SQLAlchemy engine.

    Args:
        engine: Async engine of the backend.
        statements: Backend statement builder.
        clock: Overrides the database clock for ``created_at`` (naive UTC,
            whole seconds). Without it the INSERT stamps the row itself.
    """

    backend = "sqlalchemy"

    def __init__(
        self,
        engine: AsyncEngine,
        statements: PersonStatementBuilder,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.engine = engine
        self.statements = statements
        self._clock = clock
        self._sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create(self, person: Person) -> int:
        if person.stack is None:
            person.stack = []

        async with self._sessionmaker() as session, session.begin():
            if self._clock is not None:
                person.created_at = self._clock()
            else:
                # SQL expression: rendered into the INSERT, expired after flush
                person.created_at = self.statements.insert_timestamp()
            session.add(person)
            await session.flush()
            if self._clock is None:
                await session.refresh(person, attribute_names=["created_at"])
            sequence_id = person.id

        _lazy.debug(lambda: f"db.create: Person(id={sequence_id}, uid={person.uid})")
        return sequence_id

    async def get_by_uid(self, uid: str) -> Person:
        try:
            parsed = UUID(uid)
        except (TypeError, ValueError):
            raise NotFoundError("Person", {"uid": uid}) from None

        async with self._sessionmaker() as session:
            result = await session.execute(select(Person).where(Person.uid == parsed))
            person = result.scalar_one_or_none()

        if person is None:
            raise NotFoundError("Person", {"uid": uid})
        _lazy.debug(lambda: f"db.get_by_uid: {uid} -> id={person.id}")
        return person

    async def list(self, query: PersonQuery) -> list[Person]:
        statement = self.statements.list_statement(query)
        async with self._sessionmaker() as session:
            result = await session.execute(statement)
            people = list(result.scalars().all())

        _lazy.debug(lambda: f"db.list: {query} -> {len(people)} rows")
        return people

    async def count(self) -> int:
        async with self._sessionmaker() as session:
            total = (await session.execute(self.statements.count_statement())).scalar_one()
        return int(total)

    async def ensure_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(
                lambda sync_conn: Base.metadata.create_all(
                    bind=sync_conn,
                    tables=[Person.__table__],
                    checkfirst=True,
                )
            )
        logger.info("Storage schema ready", extra={"backend": self.backend})

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning(
                "Storage health check failed",
                extra={"backend": self.backend, "error": str(e)},
            )
            return False
        return True

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Storage connections closed", extra={"backend": self.backend})


__all__ = ["PersonStore", "SQLAlchemyPersonStore"]
