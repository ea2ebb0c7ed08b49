"""Select the storage backend from configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from people_service.infra.database.postgres import PostgresPersonStore
from people_service.infra.database.sqlite import SQLitePersonStore

if TYPE_CHECKING:
    from people_service.core.settings import DatabaseSettings
    from people_service.infra.database.store import SQLAlchemyPersonStore

logger = logging.getLogger(__name__)


def create_person_store(settings: DatabaseSettings) -> SQLAlchemyPersonStore:
    """Build the person store named by ``settings.backend``.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if settings.backend == "postgres":
        store: SQLAlchemyPersonStore = PostgresPersonStore.from_settings(settings)
    elif settings.backend == "sqlite":
        store = SQLitePersonStore.from_settings(settings)
    else:
        msg = f"Unknown storage backend: {settings.backend!r}"
        raise ValueError(msg)

    logger.info(
        "Storage backend selected",
        extra={"backend": store.backend, "url": store.engine.url.render_as_string()},
    )
    return store
