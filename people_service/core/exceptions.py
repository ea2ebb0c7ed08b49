"""Application exceptions rendered as RFC 7807 problem details.

Every exception raised towards the HTTP surface derives from
:class:`AppException`; the handlers in ``app.exception_handlers`` turn them
into ``application/problem+json`` responses.
"""

from __future__ import annotations

from typing import Any

_STATUS_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (RFC 7807 ``type``).
        title: Short summary of the problem type.
        instance: URI reference of this occurrence.
        extra: Additional context merged into the problem body.

    Example:
        raise AppException(
            status_code=404,
            detail="Person abc123 not found",
            type="person-not-found",
            instance="/pessoas/abc123",
            extra={"uid": "abc123"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or _STATUS_TITLES.get(status_code, "Error")
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)


class BadRequestException(AppException):
    """Malformed request (missing mandatory query parameter and the like)."""

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            instance=instance,
            extra=extra,
        )


class NotFoundException(AppException):
    """Requested record does not exist."""

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class InternalServerException(AppException):
    """Unexpected server-side failure."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        type: str = "internal-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Internal Server Error",
            instance=instance,
            extra=extra,
        )


class BackendFailureException(InternalServerException):
    """A storage or cache call failed.

    Raised by services when a driver error escapes the store or the cache.
    The original error is chained (``raise ... from exc``) and the
    ``backend`` name is exposed in ``extra``.

    Example:
        raise BackendFailureException(
            detail="Failed to persist person",
            backend="storage",
        ) from exc
    """

    def __init__(
        self,
        detail: str,
        backend: str,
        type: str = "backend-failure",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.backend = backend
        super().__init__(
            detail=detail,
            type=type,
            instance=instance,
            extra={"backend": backend, **(extra or {})},
        )


class DeadlineExceededException(AppException):
    """The request did not finish within its deadline."""

    def __init__(
        self,
        timeout: float,
        instance: str | None = None,
    ) -> None:
        super().__init__(
            status_code=504,
            detail=f"Request did not complete within {timeout:g} seconds",
            type="deadline-exceeded",
            title="Gateway Timeout",
            instance=instance,
            extra={"timeout_seconds": timeout},
        )


__all__ = [
    "AppException",
    "BackendFailureException",
    "BadRequestException",
    "DeadlineExceededException",
    "InternalServerException",
    "NotFoundException",
]
