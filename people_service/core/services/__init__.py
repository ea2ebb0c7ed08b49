"""Service layer base classes."""

from people_service.core.services.base import BaseService

__all__ = ["BaseService"]
