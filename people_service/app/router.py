"""Router registry and setup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from people_service.features.health import router as health_router
from people_service.features.people import router as people_router

if TYPE_CHECKING:
    from fastapi import FastAPI


def setup_routers(app: FastAPI) -> None:
    """Register all feature routers with the application."""
    app.include_router(people_router)
    app.include_router(health_router)
