"""Translate a ``PersonQuery`` into SQLAlchemy statements.

Filters work directly on ``Select`` statements without hiding the query:

    stmt = select(Person)
    stmt = SubstringMatch([Person.name, Person.nickname], "ana", mode="ilike").apply(stmt)
    stmt = SeekAfter(cursor).apply(stmt)
    stmt = OrderedLimit(Person.id, limit=5).apply(stmt)

Each backend gets a statement builder that composes these filters with the
case-insensitive match operator it supports: ``ILIKE`` on PostgreSQL,
``lower(col) LIKE lower(pattern)`` on SQLite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from sqlalchemy import ColumnElement, DateTime, Select, and_, func, or_, select

from people_service.features.people.models import Person

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute

    from people_service.core.pagination import PageCursor, PersonQuery

MatchMode = Literal["ilike", "lower_like"]

LIKE_ESCAPE = "\\"


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class StatementFilter(ABC):
    """Base class for statement filters."""

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Return ``statement`` with this filter applied."""


class SubstringMatch(StatementFilter):
    """Case-insensitive substring match over several columns, OR-joined.

    Example:
        SubstringMatch([Person.name, Person.nickname], "Doe", mode="lower_like")
        # WHERE lower(name) LIKE lower('%Doe%') OR lower(nickname) LIKE lower('%Doe%')
    """

    def __init__(
        self,
        fields: Sequence[InstrumentedAttribute[Any]],
        term: str | None,
        *,
        mode: MatchMode,
    ) -> None:
        self.fields = list(fields)
        self.term = term
        self.mode = mode

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if not self.term or not self.fields:
            return statement

        pattern = f"%{escape_like(self.term)}%"
        if self.mode == "ilike":
            conditions = [field.ilike(pattern, escape=LIKE_ESCAPE) for field in self.fields]
        else:
            conditions = [
                func.lower(field).like(func.lower(pattern), escape=LIKE_ESCAPE)
                for field in self.fields
            ]
        return statement.where(or_(*conditions))


class SeekAfter(StatementFilter):
    """Seek past a cursor: sequence id greater AND creation time not earlier."""

    def __init__(self, cursor: PageCursor | None) -> None:
        self.cursor = cursor

    def apply(self, statement: Select[Any]) -> Select[Any]:
        if self.cursor is None or self.cursor.is_empty:
            return statement
        return statement.where(
            and_(
                Person.id > self.cursor.sequence_id,
                Person.created_at >= self.cursor.created_at_datetime,
            )
        )


class OrderedLimit(StatementFilter):
    """ORDER BY a single column ascending, followed by LIMIT."""

    def __init__(self, field: InstrumentedAttribute[Any], *, limit: int) -> None:
        self.field = field
        self.limit = limit

    def apply(self, statement: Select[Any]) -> Select[Any]:
        return statement.order_by(self.field.asc()).limit(self.limit)


class PersonStatementBuilder(ABC):
    """Build the statements a person store executes."""

    match_mode: ClassVar[MatchMode]

    def list_statement(self, query: PersonQuery) -> Select[tuple[Person]]:
        """SELECT statement of one listing page, ordered by sequence id."""
        statement = select(Person)
        filters: list[StatementFilter] = [
            SubstringMatch([Person.name, Person.nickname], query.search_term, mode=self.match_mode),
            SeekAfter(query.after),
            OrderedLimit(Person.id, limit=query.limit),
        ]
        for statement_filter in filters:
            statement = statement_filter.apply(statement)
        return statement

    def count_statement(self) -> Select[tuple[int]]:
        return select(func.count()).select_from(Person)

    @abstractmethod
    def insert_timestamp(self) -> ColumnElement[Any]:
        """Database clock in UTC, truncated to the second, for ``created_at``.

        Evaluated by the INSERT itself, so the timestamp and the sequence id
        come from the same statement on the same server.
        """


class PostgresStatementBuilder(PersonStatementBuilder):
    match_mode = "ilike"

    def insert_timestamp(self) -> ColumnElement[Any]:
        return func.date_trunc(
            "second",
            func.timezone("UTC", func.statement_timestamp()),
            type_=DateTime(),
        )


class SQLiteStatementBuilder(PersonStatementBuilder):
    match_mode = "lower_like"

    def insert_timestamp(self) -> ColumnElement[Any]:
        # Same text layout SQLAlchemy binds for DateTime, so seeks compare correctly
        return func.strftime("%Y-%m-%d %H:%M:%S.000000", "now", type_=DateTime())


__all__ = [
    "LIKE_ESCAPE",
    "OrderedLimit",
    "PersonStatementBuilder",
    "PostgresStatementBuilder",
    "SQLiteStatementBuilder",
    "SeekAfter",
    "StatementFilter",
    "SubstringMatch",
    "escape_like",
]
