"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starwars_service.core.settings import get_graphql_settings
from starwars_service.features.graphql.router import create_graphql_router
from starwars_service.features.metrics.router import router as metrics_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from starwars_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, graphql_settings: GraphQLSettings | None = None) -> None:
    """Register the metrics endpoint and, when enabled, the GraphQL endpoint."""
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(metrics_router, tags=["observability"])

    if graphql_settings.enabled:
        app.include_router(
            create_graphql_router(graphql_settings),
            prefix=graphql_settings.path,
            tags=["graphql"],
        )
        logger.info("GraphQL endpoint enabled", extra={"path": graphql_settings.path})
    else:
        logger.info("GraphQL endpoint disabled")


__all__ = ["setup_routers"]
