"""Mutation resolvers for the GraphQL API.

Provides write operations:
- createHuman: create a new human with server-assigned id and timestamps
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info

from starwars_service.core.services import MutationGateway
from starwars_service.features.characters import Human
from starwars_service.features.graphql.context import GraphQLContext
from starwars_service.features.graphql.types import HumanInputType, HumanType

logger = logging.getLogger(__name__)

HumanArg = Annotated[HumanInputType, strawberry.argument(description="The human you want to create")]


@strawberry.type(description="The mutation type, represents all updates we can make to our data")
class Mutation:
    """GraphQL Mutation resolvers."""

    @strawberry.mutation(description="Create a new human")
    async def create_human(
        self,
        info: Info[GraphQLContext, None],
        human: HumanArg,
    ) -> HumanType:
        """Create a new human.

        Example:
            mutation createHuman($human: HumanInput!) {
              createHuman(human: $human) { id name dateOfBirth appearsIn created }
            }

        Args:
            info: Strawberry info with context
            human: Client-supplied fields

        Returns:
            The created human
        """
        ctx = info.context
        gateway = MutationGateway(ctx.repository.humans, ctx.clock, model_cls=Human)
        created = await gateway.create(human.to_model())

        # Later lookups in this request must not refetch what was just written
        ctx.loaders.humans.prime(created.id, created)
        ctx.loaders.characters.prime(created.id, created)
        return HumanType.from_model(created)


__all__ = ["Mutation"]
