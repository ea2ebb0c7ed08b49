"""Health checks of the storage backend and the record cache."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import Depends

from people_service import __version__
from people_service.core.dependencies import AppContext, get_app_context
from people_service.core.services import BaseService
from people_service.features.health.schemas import HealthResponse


class HealthService(BaseService):
    """Ping every dependency of the running application."""

    def __init__(self, context: AppContext) -> None:
        super().__init__()
        self.context = context

    async def check_health(self) -> HealthResponse:
        storage_ok, cache_ok = await asyncio.gather(
            self.context.store.health_check(),
            self.context.cache.health_check(),
        )
        checks = {"storage": storage_ok, "cache": cache_ok}
        status = "ok" if all(checks.values()) else "degraded"
        if status != "ok":
            self.logger.warning("Health check degraded", extra={"checks": checks})
        return HealthResponse(status=status, version=__version__, checks=checks)


def get_health_service(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> HealthService:
    return HealthService(context)


HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]

__all__ = ["HealthService", "HealthServiceDep", "get_health_service"]
