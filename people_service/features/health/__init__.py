"""Health feature: dependency checks for probes."""

from people_service.features.health.router import router

__all__ = ["router"]
