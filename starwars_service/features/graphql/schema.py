"""GraphQL schema assembly."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry
from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, QueryDepthLimiter

from starwars_service.core.settings import get_graphql_settings
from starwars_service.features.graphql.error_handler import ProblemDetailsExtension, log_error
from starwars_service.features.graphql.resolvers import Mutation, Query
from starwars_service.features.graphql.types import DroidType, HumanType

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

    from starwars_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)

# Maximum query depth; friends-of-friends chains are the deepest legitimate queries
MAX_QUERY_DEPTH = 10


class StarWarsSchema(strawberry.Schema):
    """Schema that logs errors through the application loggers."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            log_error(error, execution_context)


def get_extensions(settings: GraphQLSettings) -> list:
    extensions: list = [
        QueryDepthLimiter(max_depth=MAX_QUERY_DEPTH),
        ProblemDetailsExtension,
    ]
    if not settings.introspection_enabled:
        extensions.append(AddValidationRules([NoSchemaIntrospectionCustomRule]))
    return extensions


def create_schema(settings: GraphQLSettings | None = None) -> StarWarsSchema:
    """Build the schema with extensions chosen by ``settings``."""
    settings = settings or get_graphql_settings()
    schema = StarWarsSchema(
        query=Query,
        mutation=Mutation,
        types=[DroidType, HumanType],
        extensions=get_extensions(settings),
    )
    logger.debug(
        "GraphQL schema created",
        extra={"depth_limit": MAX_QUERY_DEPTH, "introspection": settings.introspection_enabled},
    )
    return schema


__all__ = ["MAX_QUERY_DEPTH", "StarWarsSchema", "create_schema"]
