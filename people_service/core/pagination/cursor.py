"""Cursor encoding and decoding for the people listing.

A cursor marks the last record of a page so the next query can seek past
it. It carries the record's sequence id and its creation time as integer
epoch seconds, rendered on the wire as a plain dash-separated pair:

    "42-1700000000"

Cursors are versioned. The current form is unprefixed; the decoder also
accepts an explicit ``v1.`` prefix (``"v1.42-1700000000"``) and treats any
other ``v<N>.`` prefix as unknown, so future fields can be added under a new
prefix while links issued today keep working.

Decoding never raises: an empty, malformed, out-of-range or unknown token
decodes to the empty cursor, which means "first page". Out of range is a
sequence id beyond a signed 64-bit integer or a timestamp past year 9999.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
import re
from typing import Any, ClassVar

CURSOR_VERSION = 1
SEPARATOR = "-"

# Signed 64-bit column bound of the sequence id
MAX_SEQUENCE_ID = 2**63 - 1
# 9999-12-31T23:59:59Z, the last second a datetime can hold
MAX_CREATED_AT = 253402300799

_VERSION_PREFIX = re.compile(r"^v(\d+)\.")


def _epoch_seconds(value: datetime) -> int:
    """Epoch seconds of a datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp())


def _parse_non_negative(part: str) -> int | None:
    # int() refuses very long digit strings; nothing past 20 digits is in range
    if not part or len(part) > 20 or not part.isascii() or not part.isdigit():
        return None
    return int(part)


@dataclass(frozen=True, slots=True)
class PageCursor:
    """Position of the last record of a page.

    Attributes:
        sequence_id: Storage sequence id of the record (0 = no position).
        created_at: Creation time of the record in epoch seconds.
    """

    version: ClassVar[int] = CURSOR_VERSION

    sequence_id: int = 0
    created_at: int = 0

    @property
    def is_empty(self) -> bool:
        """True when the cursor does not point at any record."""
        return self.sequence_id == 0

    @property
    def created_at_datetime(self) -> datetime:
        """Creation time as a naive UTC datetime, as stored by the backends."""
        return datetime.fromtimestamp(self.created_at, UTC).replace(tzinfo=None)

    @classmethod
    def from_record(cls, record: Any) -> PageCursor:
        """Build a cursor from a record exposing ``id`` and ``created_at``."""
        return cls(sequence_id=record.id, created_at=_epoch_seconds(record.created_at))

    def encode(self) -> str:
        """Wire form of the cursor; the empty string for the empty cursor."""
        if self.is_empty:
            return ""
        return f"{self.sequence_id}{SEPARATOR}{self.created_at}"


EMPTY_CURSOR = PageCursor()


def encode_cursor(records: Sequence[Any]) -> str:
    """Encode the cursor of a page: its last record, or ``""`` when empty.

    Args:
        records: Page of records ordered as returned by storage.

    Returns:
        Opaque cursor token.
    """
    if not records:
        return ""
    return PageCursor.from_record(records[-1]).encode()


def decode_cursor(token: str | None) -> PageCursor:
    """Decode a cursor token.

    Args:
        token: Token as received from the client (may be None or empty).

    Returns:
        The decoded cursor, or ``EMPTY_CURSOR`` when the token is empty,
        malformed, negative, out of range or carries an unknown version
        prefix.
    """
    if not token:
        return EMPTY_CURSOR

    match = _VERSION_PREFIX.match(token)
    if match:
        if int(match.group(1)) != CURSOR_VERSION:
            return EMPTY_CURSOR
        token = token[match.end() :]

    sequence_part, separator, created_part = token.partition(SEPARATOR)
    if not separator:
        return EMPTY_CURSOR

    sequence_id = _parse_non_negative(sequence_part)
    created_at = _parse_non_negative(created_part)
    if sequence_id is None or created_at is None:
        return EMPTY_CURSOR
    if sequence_id > MAX_SEQUENCE_ID or created_at > MAX_CREATED_AT:
        return EMPTY_CURSOR

    return PageCursor(sequence_id=sequence_id, created_at=created_at)


__all__ = [
    "CURSOR_VERSION",
    "EMPTY_CURSOR",
    "MAX_CREATED_AT",
    "MAX_SEQUENCE_ID",
    "PageCursor",
    "decode_cursor",
    "encode_cursor",
]
