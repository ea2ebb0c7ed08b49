"""Application context and its FastAPI dependency.

The process-wide resources (person store, record cache) are built once in
the lifespan, kept on ``app.state.context`` and injected per request:

    @router.get("/things")
    async def handler(context: AppContextDep) -> ...:
        await context.store.count()
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from people_service.core.exceptions import AppException

if TYPE_CHECKING:
    from people_service.infra.cache import RecordCache
    from people_service.infra.database import PersonStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Shared resources of a running application."""

    store: PersonStore
    cache: RecordCache

    async def close(self) -> None:
        """Release the cache connection pool, then the storage engine."""
        try:
            await self.cache.close()
        finally:
            await self.store.close()


def get_app_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context built at startup.

    Raises:
        AppException: 503 if the application has not finished starting.
    """
    context: AppContext | None = getattr(request.app.state, "context", None)
    if context is None:
        raise AppException(
            status_code=503,
            detail="Application context is not initialized",
            type="service-unavailable",
        )
    return context


AppContextDep = Annotated[AppContext, Depends(get_app_context)]

__all__ = ["AppContext", "AppContextDep", "get_app_context"]
