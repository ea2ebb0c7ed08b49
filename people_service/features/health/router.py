"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from people_service.features.health.schemas import HealthResponse
from people_service.features.health.service import HealthServiceDep  # noqa: TC001

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Dependency health",
    description="Pings storage and cache; `degraded` when either fails.",
)
async def health_check(service: HealthServiceDep) -> HealthResponse:
    return await service.check_health()
