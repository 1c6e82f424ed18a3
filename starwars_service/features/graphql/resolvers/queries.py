"""Query resolvers for the GraphQL API.

Provides read operations for the character catalogue:
- droid(id), human(id), character(id): point lookups through the loaders
- droids(first, after, last, before): droids by manufacture date
- humans(first, after, last, before): humans by creation time
"""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

import strawberry
from strawberry.types import Info

from starwars_service.core.settings import get_graphql_settings
from starwars_service.features.graphql.context import GraphQLContext
from starwars_service.features.graphql.types import (
    CharacterType,
    DroidConnection,
    DroidType,
    HumanConnection,
    HumanType,
    to_character_type,
)

logger = logging.getLogger(__name__)

# Type aliases for annotated arguments with descriptions
IdArg = Annotated[strawberry.ID, strawberry.argument(description="The unique identifier")]
FirstArg = Annotated[
    int | None, strawberry.argument(description="Number of items to return (forward pagination)"),
]
AfterArg = Annotated[
    str | None, strawberry.argument(description="Cursor to start after (forward pagination)"),
]
LastArg = Annotated[
    int | None, strawberry.argument(description="Number of items to return (backward pagination)"),
]
BeforeArg = Annotated[
    str | None, strawberry.argument(description="Cursor to start before (backward pagination)"),
]


def parse_id(id_: strawberry.ID) -> UUID | None:
    """Malformed ids cannot match any entity, so they resolve to null."""
    try:
        return UUID(str(id_))
    except ValueError:
        return None


def page_size(ctx: GraphQLContext, first: int | None, last: int | None) -> int | None:
    """Apply the default page size when neither first nor last is given."""
    if first is None and last is None:
        settings = ctx.settings or get_graphql_settings()
        return settings.default_page_size
    return first


def max_page_size(ctx: GraphQLContext) -> int:
    return (ctx.settings or get_graphql_settings()).max_page_size


@strawberry.type(description="Root query type")
class Query:
    """GraphQL Query resolvers."""

    @strawberry.field(description="Get a droid by its unique identifier")
    async def droid(self, info: Info[GraphQLContext, None], id: IdArg) -> DroidType | None:
        droid_id = parse_id(id)
        if droid_id is None:
            return None
        droid = await info.context.loaders.droids.load(droid_id)
        return DroidType.from_model(droid) if droid else None

    @strawberry.field(description="Get a human by its unique identifier")
    async def human(self, info: Info[GraphQLContext, None], id: IdArg) -> HumanType | None:
        human_id = parse_id(id)
        if human_id is None:
            return None
        human = await info.context.loaders.humans.load(human_id)
        return HumanType.from_model(human) if human else None

    @strawberry.field(description="Get a droid or human by its unique identifier")
    async def character(
        self, info: Info[GraphQLContext, None], id: IdArg
    ) -> CharacterType | None:
        character_id = parse_id(id)
        if character_id is None:
            return None
        character = await info.context.loaders.characters.load(character_id)
        return to_character_type(character) if character else None

    @strawberry.field(description="Droids ordered by manufacture date, with cursor pagination")
    async def droids(
        self,
        info: Info[GraphQLContext, None],
        first: FirstArg = None,
        after: AfterArg = None,
        last: LastArg = None,
        before: BeforeArg = None,
    ) -> DroidConnection:
        """List droids with Relay-style cursor pagination.

        Args:
            info: Strawberry info with context
            first: Items for forward pagination
            after: Cursor for forward pagination
            last: Items for backward pagination
            before: Cursor for backward pagination

        Returns:
            DroidConnection with edges and page_info
        """
        ctx = info.context
        page = await ctx.repository.page_droids(
            first=page_size(ctx, first, last),
            after=after,
            last=last,
            before=before,
            include_total=True,
            max_page_size=max_page_size(ctx),
        )
        for droid in page.items:
            ctx.loaders.droids.prime(droid.id, droid)
        return DroidConnection.from_page(page)

    @strawberry.field(description="Humans ordered by creation time, with cursor pagination")
    async def humans(
        self,
        info: Info[GraphQLContext, None],
        first: FirstArg = None,
        after: AfterArg = None,
        last: LastArg = None,
        before: BeforeArg = None,
    ) -> HumanConnection:
        """List humans with Relay-style cursor pagination."""
        ctx = info.context
        page = await ctx.repository.page_humans(
            first=page_size(ctx, first, last),
            after=after,
            last=last,
            before=before,
            include_total=True,
            max_page_size=max_page_size(ctx),
        )
        for human in page.items:
            ctx.loaders.humans.prime(human.id, human)
        return HumanConnection.from_page(page)


__all__ = ["Query"]
