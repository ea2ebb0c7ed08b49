"""Tests for listing query composition."""

from __future__ import annotations

from people_service.core.pagination import PAGE_SIZE, PageCursor, PersonQuery, compose_query


class TestComposeQuery:
    """Tests for compose_query."""

    def test_first_page(self):
        query = compose_query("ana", None)

        assert query == PersonQuery(search_term="ana", after=None, limit=PAGE_SIZE)

    def test_page_size_is_five(self):
        assert PAGE_SIZE == 5
        assert compose_query("ana", None).limit == 5

    def test_cursor_sets_seek_position(self):
        query = compose_query("ana", "42-1700000000")

        assert query.after == PageCursor(sequence_id=42, created_at=1700000000)

    def test_invalid_cursor_means_first_page(self):
        """An undecodable cursor is not an error."""
        assert compose_query("ana", "not-a-cursor").after is None

    def test_empty_term_means_no_filter(self):
        assert compose_query("", None).search_term is None
        assert compose_query(None, None).search_term is None
