"""GraphQL error processing.

Errors raised from resolvers reach the client as GraphQL errors. This module:
1. Logs every error server-side with the request's correlation ID
2. Adds RFC 7807 style ``code``/``status`` extensions for ``AppException``s
3. Masks unexpected internal errors in production
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError
from strawberry.extensions import SchemaExtension

from starwars_service.core.exceptions import AppException
from starwars_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "INTERNAL_ERROR"


def problem_extensions(exc: AppException) -> dict[str, Any]:
    return {"code": exc.type, "status": exc.status_code, "title": exc.title}


def enrich_error(error: GraphQLError, *, mask_internal: bool) -> GraphQLError:
    """Return the error with structured extensions, masked if required."""
    original = error.original_error
    if isinstance(original, AppException):
        error.extensions = {**(error.extensions or {}), **problem_extensions(original)}
        return error
    if original is None:
        return error
    if mask_internal:
        return GraphQLError(
            "An internal error occurred. Please try again later.",
            nodes=error.nodes,
            source=error.source,
            positions=error.positions,
            path=error.path,
            # kept for server-side logging; never serialized
            original_error=original,
            extensions={"code": INTERNAL_ERROR, "timestamp": datetime.now(UTC).isoformat()},
        )
    error.extensions = {
        **(error.extensions or {}),
        "code": INTERNAL_ERROR,
        "debug": {
            "exception_type": type(original).__name__,
            "exception_message": str(original),
        },
    }
    return error


class ProblemDetailsExtension(SchemaExtension):
    """Rewrite operation errors once execution has finished."""

    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if not errors:
            return
        mask_internal = get_app_settings().is_production
        result.errors = [enrich_error(error, mask_internal=mask_internal) for error in errors]


def log_error(error: GraphQLError, execution_context: ExecutionContext | None) -> None:
    """Log an execution error with full details.

    Application errors are expected outcomes and logged at INFO without a
    traceback; anything else is logged at ERROR with one.
    """
    log_context: dict[str, Any] = {
        "error_message": error.message,
        "error_path": error.path,
    }
    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        correlation_id = getattr(execution_context.context, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

    original = error.original_error
    if isinstance(original, AppException):
        log_context.update(
            error_type=original.type,
            status_code=original.status_code,
            **{f"error_{key}": value for key, value in original.extra.items()},
        )
        logger.info("GraphQL application error", extra=log_context)
    elif original is not None:
        log_context["exception_type"] = type(original).__name__
        logger.error("GraphQL internal error", exc_info=original, extra=log_context)
    else:
        logger.info("GraphQL request error", extra=log_context)


__all__ = [
    "INTERNAL_ERROR",
    "ProblemDetailsExtension",
    "enrich_error",
    "log_error",
    "problem_extensions",
]
