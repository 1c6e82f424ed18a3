"""GraphQL root resolvers."""

from starwars_service.features.graphql.resolvers.mutations import Mutation
from starwars_service.features.graphql.resolvers.queries import Query

__all__ = ["Mutation", "Query"]
