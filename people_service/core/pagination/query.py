"""Backend-neutral description of a people listing query.

``compose_query`` turns the raw request inputs (search term and cursor
token) into a :class:`PersonQuery`. Each storage backend translates it into
its own SQL through a statement builder; nothing here knows about SQL.
"""

from __future__ import annotations

from dataclasses import dataclass

from people_service.core.pagination.cursor import PageCursor, decode_cursor

PAGE_SIZE = 5


@dataclass(frozen=True, slots=True)
class PersonQuery:
    """Filter, seek position and bound of one listing page.

    Attributes:
        search_term: Substring matched against name OR nickname (None = all).
        after: Seek past this position (id greater, creation time not
            earlier). None on the first page.
        limit: Maximum number of records.

    Records are always ordered by sequence id ascending.
    """

    search_term: str | None = None
    after: PageCursor | None = None
    limit: int = PAGE_SIZE


def compose_query(search_term: str | None, cursor: str | None) -> PersonQuery:
    """Compose the listing query for a search term and cursor token.

    Never rejects input: an empty term means no filter, and an empty or
    undecodable cursor means the first page.
    """
    decoded = decode_cursor(cursor)
    return PersonQuery(
        search_term=search_term or None,
        after=None if decoded.is_empty else decoded,
    )


__all__ = ["PAGE_SIZE", "PersonQuery", "compose_query"]
