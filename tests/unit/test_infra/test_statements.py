"""Tests for SQL statement building."""

from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite

from people_service.core.pagination import compose_query
from people_service.infra.database.statements import (
    PostgresStatementBuilder,
    SQLiteStatementBuilder,
    escape_like,
)


def _sql(statement, dialect) -> str:
    return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


class TestEscapeLike:
    def test_wildcards_are_escaped(self):
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escape_character_is_escaped(self):
        assert escape_like("a\\b") == "a\\\\b"

    def test_plain_term_unchanged(self):
        assert escape_like("John") == "John"


class TestPostgresStatements:
    """PostgreSQL uses ILIKE."""

    def test_search_uses_ilike_on_name_and_nickname(self):
        sql = _sql(PostgresStatementBuilder().list_statement(compose_query("doe", None)), postgresql.dialect())

        assert sql.count("ILIKE") == 2
        assert "people.name" in sql
        assert "people.nickname" in sql
        assert " OR " in sql

    def test_order_and_limit(self):
        sql = _sql(PostgresStatementBuilder().list_statement(compose_query("doe", None)), postgresql.dialect())

        assert "ORDER BY people.id ASC" in sql
        assert "LIMIT 5" in sql

    def test_first_page_has_no_seek(self):
        sql = _sql(PostgresStatementBuilder().list_statement(compose_query("doe", None)), postgresql.dialect())

        assert "people.id >" not in sql

    def test_cursor_adds_seek_predicate(self):
        query = compose_query("doe", "42-1700000000")
        sql = _sql(PostgresStatementBuilder().list_statement(query), postgresql.dialect())

        assert "people.id > 42" in sql
        assert "people.created_at >=" in sql
        assert "2023-11-14 22:13:20" in sql

    def test_count_statement(self):
        sql = _sql(PostgresStatementBuilder().count_statement(), postgresql.dialect())

        assert "count(*)" in sql
        assert "FROM people" in sql

    def test_insert_timestamp_is_whole_utc_seconds(self):
        sql = _sql(PostgresStatementBuilder().insert_timestamp(), postgresql.dialect())

        assert "date_trunc('second'" in sql
        assert "timezone('UTC', statement_timestamp())" in sql


class TestSQLiteStatements:
    """SQLite lowers both sides of LIKE."""

    def test_search_lowers_both_sides(self):
        sql = _sql(SQLiteStatementBuilder().list_statement(compose_query("Doe", None)), sqlite.dialect())

        assert "lower(people.name) LIKE lower(" in sql
        assert "lower(people.nickname) LIKE lower(" in sql
        assert "ILIKE" not in sql

    def test_no_filter_without_term(self):
        sql = _sql(SQLiteStatementBuilder().list_statement(compose_query("", None)), sqlite.dialect())

        assert "LIKE" not in sql

    def test_insert_timestamp_matches_datetime_storage_format(self):
        """The stamp has the layout SQLAlchemy binds for DateTime on SQLite."""
        sql = _sql(SQLiteStatementBuilder().insert_timestamp(), sqlite.dialect())

        assert sql.startswith("strftime(")
        assert "%Y-%m-%d %H:%M:%S.000000" in sql
        assert "'now'" in sql
