"""People feature: registration, lookup, search listing and count."""

from people_service.features.people.router import router

__all__ = ["router"]
