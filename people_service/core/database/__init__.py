"""Core database package: declarative base and storage exceptions."""

from __future__ import annotations

from .base import NAMING_CONVENTION, Base
from .exceptions import NotFoundError, RepositoryError

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "NotFoundError",
    "RepositoryError",
]
