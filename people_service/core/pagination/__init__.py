"""Cursor pagination for the people listing.

- ``cursor``: the versioned ``PageCursor`` value type and its codec.
- ``query``: ``compose_query`` producing a backend-neutral ``PersonQuery``.

Pages are walked forward by cursor; the way back is carried by the client
as a navigation stack of previously issued cursors.
"""

from people_service.core.pagination.cursor import (
    CURSOR_VERSION,
    EMPTY_CURSOR,
    PageCursor,
    decode_cursor,
    encode_cursor,
)
from people_service.core.pagination.query import PAGE_SIZE, PersonQuery, compose_query

__all__ = [
    "CURSOR_VERSION",
    "EMPTY_CURSOR",
    "PAGE_SIZE",
    "PageCursor",
    "PersonQuery",
    "compose_query",
    "decode_cursor",
    "encode_cursor",
]
