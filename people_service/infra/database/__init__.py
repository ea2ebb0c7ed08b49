"""Storage backends for person records.

    store = create_person_store(get_db_settings())
    await store.ensure_schema()
    sequence_id = await store.create(person)
"""

from __future__ import annotations

from people_service.infra.database.factory import create_person_store
from people_service.infra.database.postgres import PostgresPersonStore
from people_service.infra.database.sqlite import SQLitePersonStore
from people_service.infra.database.statements import (
    PersonStatementBuilder,
    PostgresStatementBuilder,
    SQLiteStatementBuilder,
    escape_like,
)
from people_service.infra.database.store import (
    PersonStore,
    SQLAlchemyPersonStore,
)

__all__ = [
    "PersonStatementBuilder",
    "PersonStore",
    "PostgresPersonStore",
    "PostgresStatementBuilder",
    "SQLAlchemyPersonStore",
    "SQLitePersonStore",
    "SQLiteStatementBuilder",
    "create_person_store",
    "escape_like",
]
