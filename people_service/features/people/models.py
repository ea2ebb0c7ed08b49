"""SQLAlchemy model for person records."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import JSON, BigInteger, Date, DateTime, Integer, String, Uuid
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column

from people_service.core.database import Base

# SQLite only honours AUTOINCREMENT on an INTEGER PRIMARY KEY column
SequenceId = BigInteger().with_variant(Integer(), "sqlite")
StackTags = JSON().with_variant(postgresql.ARRAY(String(32)), "postgresql")


class Person(Base):
    """A registered person.

    ``id`` is the storage sequence id: strictly increasing, never reused and
    never exposed over HTTP. Clients address records by ``uid``.
    ``created_at`` is assigned by the store at insert time (naive UTC,
    second precision) and drives cursor seeks together with ``id``.
    """

    __tablename__ = "people"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(SequenceId, primary_key=True, autoincrement=True)
    uid: Mapped[UUID] = mapped_column(
        "uuid",
        Uuid(),
        nullable=False,
        unique=True,
        index=True,
        comment="Public identifier, assigned by the service",
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    nickname: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    birthdate: Mapped[date] = mapped_column(Date(), nullable=False)
    stack: Mapped[list[str]] = mapped_column(StackTags, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        index=True,
        comment="Insert time, UTC truncated to the second",
    )

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, uid={self.uid}, nickname={self.nickname!r})>"
