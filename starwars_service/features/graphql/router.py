"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint mounted at ``GraphQLSettings.path``
- GraphQL IDE (GraphiQL, Apollo Sandbox or Pathfinder) when enabled
- A request context whose DataLoaders are closed when the request ends
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, cast
from uuid import uuid4

from fastapi import BackgroundTasks, Request, Response
from strawberry.fastapi import GraphQLRouter

from starwars_service.core.settings import get_dataloader_settings, get_graphql_settings
from starwars_service.features.graphql.context import GraphQLContext
from starwars_service.features.graphql.dataloaders import create_dataloaders
from starwars_service.features.graphql.schema import create_schema
from starwars_service.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import APIRouter

    from starwars_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Echoed in a response header and written to every log record
_CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def extract_correlation_id(request: Request) -> str:
    """Return the client's correlation id, or a fresh one if absent or unsafe."""
    supplied = request.headers.get(CORRELATION_HEADER)
    if supplied and _CORRELATION_ID_PATTERN.fullmatch(supplied):
        return supplied
    if supplied:
        logger.debug(
            "Replacing malformed correlation id",
            extra={"header_length": len(supplied)},
        )
    return uuid4().hex


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
) -> AsyncIterator[GraphQLContext]:
    """Create the per-request GraphQL context.

    Application-wide collaborators (repository, clock) come from
    ``app.state``; loaders are created here and closed in ``finally`` so
    their cache and any open batch are released on success, error or
    cancellation alike.
    """
    state = request.app.state
    correlation_id = extract_correlation_id(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    set_log_context(correlation_id=correlation_id)

    loaders = create_dataloaders(state.repository, get_dataloader_settings())
    try:
        yield GraphQLContext(
            request=request,
            response=response,
            background_tasks=background_tasks,
            repository=state.repository,
            loaders=loaders,
            settings=get_graphql_settings(),
            clock=state.clock,
            correlation_id=correlation_id,
        )
    finally:
        await loaders.close()
        clear_log_context()


def create_graphql_router(settings: GraphQLSettings | None = None) -> APIRouter:
    """Create GraphQL router with settings-based configuration."""
    settings = settings or get_graphql_settings()

    # Empty path: the prefix given to include_router is the whole endpoint path
    return GraphQLRouter(
        create_schema(settings),
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.graphql_ide or None,
    )


__all__ = [
    "CORRELATION_HEADER",
    "create_graphql_router",
    "extract_correlation_id",
    "get_graphql_context",
]
