"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=404,
            detail="Droid not found",
            type="droid-not-found",
            extra={"droid_id": "abc123"},
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
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            499: "Client Closed Request",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")


class InvalidArgumentException(AppException):
    """Exception raised for null or malformed client input.

    Covers missing mutation inputs, out-of-range page sizes and
    cursors that cannot be decoded. Never retried.

    Example:
        raise InvalidArgumentException(
            detail="Invalid cursor",
            extra={"argument": "after"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-argument",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Invalid Argument",
            instance=instance,
            extra=extra,
        )


class NotFoundException(AppException):
    """Exception raised when a required resource is not found.

    Batch loaders never raise this themselves; a missing key resolves to
    ``None``. Callers that treat absence as an error raise it at the call site.

    Example:
        raise NotFoundException(
            detail="Droid with ID abc123 not found",
            type="droid-not-found",
            extra={"droid_id": "abc123"},
        )
    """

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


class CancelledException(AppException):
    """Exception raised when the owning request withdrew before completion.

    Set on every pending batch slot when a loader is cancelled or closed,
    so awaiting resolvers fail instead of hanging.
    """

    def __init__(
        self,
        detail: str = "Request was cancelled",
        type: str = "cancelled",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=499,
            detail=detail,
            type=type,
            title="Client Closed Request",
            instance=instance,
            extra=extra,
        )


class StoreFailureException(AppException):
    """Exception raised when the storage collaborator fails.

    A failed batch dispatch produces exactly one instance which is
    set on every pending slot of that batch.

    Example:
        raise StoreFailureException(
            detail="Droid store is unavailable",
            extra={"loader": "droids", "batch_size": 3},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "store-failure",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=503,
            detail=detail,
            type=type,
            title="Service Unavailable",
            instance=instance,
            extra=extra,
        )


__all__ = [
    "AppException",
    "CancelledException",
    "InvalidArgumentException",
    "NotFoundException",
    "StoreFailureException",
]
