"""Storage layer exceptions.

Stores raise these instead of leaking raw SQLAlchemy errors for data-level
conditions; driver failures propagate as ``SQLAlchemyError`` and are
translated by the service layer.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for storage operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class NotFoundError(RepositoryError):
    """No row matches the requested key.

    Attributes:
        model_name: Name of the model that was looked up.
        identifier: Key/value pairs used in the lookup.
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!r}" for k, v in identifier.items())
        super().__init__(
            f"{model_name} not found with {id_str}",
            details={"model": model_name, **identifier},
        )

    def __repr__(self) -> str:
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


__all__ = [
    "NotFoundError",
    "RepositoryError",
]
