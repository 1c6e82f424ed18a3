"""GraphQL types for the character catalogue.

Provides:
- Episode enum and the Character interface
- DroidType / HumanType implementing Character
- HumanInputType for createHuman
- Connection types: DroidEdge, DroidConnection, HumanEdge, HumanConnection
"""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

import strawberry
from pydantic import ValidationError
from strawberry.types import Info

from starwars_service.core.exceptions import InvalidArgumentException
from starwars_service.core.pagination import Page
from starwars_service.features.characters import Character, Droid, Episode, Human, HumanInput
from starwars_service.features.graphql.context import GraphQLContext
from starwars_service.features.graphql.types.base import PageInfoType

EpisodeType = strawberry.enum(Episode, description="One of the films in the Star Wars Trilogy")


@strawberry.interface(name="Character", description="A character from the Star Wars universe")
class CharacterType:
    """Fields shared by droids and humans."""

    id: strawberry.ID = strawberry.field(description="The unique identifier of the character")
    name: str = strawberry.field(description="The name of the character")
    appears_in: list[EpisodeType] = strawberry.field(description="Which movies they appear in")
    friend_ids: strawberry.Private[tuple[UUID, ...]]

    @strawberry.field(description="The friends of the character, or an empty list if they have none")
    async def friends(self, info: Info[GraphQLContext, None]) -> list[CharacterType]:
        found = await info.context.loaders.characters.load_many(self.friend_ids)
        return [to_character_type(friend) for friend in found if friend is not None]


@strawberry.type(name="Droid", description="A mechanical creature in the Star Wars universe")
class DroidType(CharacterType):
    chassis_number: str | None = strawberry.field(description="The droid's chassis number")
    manufactured: datetime = strawberry.field(description="When the droid was manufactured")
    primary_function: str | None = strawberry.field(description="The primary function of the droid")

    @classmethod
    def from_model(cls, droid: Droid) -> DroidType:
        return cls(
            id=strawberry.ID(str(droid.id)),
            name=droid.name,
            appears_in=list(droid.appears_in),
            friend_ids=droid.friends,
            chassis_number=droid.chassis_number,
            manufactured=droid.manufactured,
            primary_function=droid.primary_function,
        )


@strawberry.type(name="Human", description="A humanoid creature from the Star Wars universe")
class HumanType(CharacterType):
    home_planet: str | None = strawberry.field(description="The home planet of the human")
    date_of_birth: date | None = strawberry.field(description="The date of birth of the human")
    created: datetime = strawberry.field(description="When the human was created")
    modified: datetime = strawberry.field(description="When the human was last modified")

    @classmethod
    def from_model(cls, human: Human) -> HumanType:
        return cls(
            id=strawberry.ID(str(human.id)),
            name=human.name,
            appears_in=list(human.appears_in),
            friend_ids=human.friends,
            home_planet=human.home_planet,
            date_of_birth=human.date_of_birth,
            created=human.created,
            modified=human.modified,
        )


def to_character_type(character: Character) -> CharacterType:
    """Map a domain character onto its concrete GraphQL type."""
    if isinstance(character, Droid):
        return DroidType.from_model(character)
    if isinstance(character, Human):
        return HumanType.from_model(character)
    msg = f"Unknown character kind: {type(character).__name__}"
    raise TypeError(msg)


# --- Input Types ---


@strawberry.input(name="HumanInput", description="Input for creating a new human")
class HumanInputType:
    """Input for createHuman mutation."""

    name: str = strawberry.field(description="The name of the human")
    home_planet: str | None = strawberry.field(
        default=None,
        description="The home planet of the human",
    )
    date_of_birth: date | None = strawberry.field(
        default=None,
        description="The date of birth of the human",
    )
    appears_in: list[EpisodeType] = strawberry.field(
        default_factory=list,
        description="Which movies they appear in",
    )
    friends: list[strawberry.ID] = strawberry.field(
        default_factory=list,
        description="IDs of the human's friends",
    )

    def to_model(self) -> HumanInput:
        """Validate into the domain input model.

        Raises:
            InvalidArgumentException: If a field is malformed
        """
        try:
            return HumanInput(
                name=self.name,
                home_planet=self.home_planet,
                date_of_birth=self.date_of_birth,
                appears_in=tuple(self.appears_in),
                friends=tuple(UUID(str(friend)) for friend in self.friends),
            )
        except ValidationError as exc:
            raise InvalidArgumentException(
                detail="Invalid human input",
                extra={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
        except ValueError as exc:
            raise InvalidArgumentException(
                detail=f"Invalid friend ID: {exc}",
                extra={"argument": "friends"},
            ) from exc


# --- Connection Types (Relay Pattern) ---


@strawberry.type(description="Edge containing a droid and its cursor")
class DroidEdge:
    node: DroidType = strawberry.field(description="The droid")
    cursor: str = strawberry.field(description="Cursor for this item")


@strawberry.type(description="Paginated connection of droids")
class DroidConnection:
    """Droids ordered by manufacture date."""

    edges: list[DroidEdge] = strawberry.field(description="List of edges (items with cursors)")
    page_info: PageInfoType = strawberry.field(description="Pagination metadata")

    @classmethod
    def from_page(cls, page: Page[Droid]) -> DroidConnection:
        connection = page.to_connection()
        return cls(
            edges=[
                DroidEdge(node=DroidType.from_model(edge.node), cursor=edge.cursor)
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_schema(connection.page_info),
        )


@strawberry.type(description="Edge containing a human and its cursor")
class HumanEdge:
    node: HumanType = strawberry.field(description="The human")
    cursor: str = strawberry.field(description="Cursor for this item")


@strawberry.type(description="Paginated connection of humans")
class HumanConnection:
    """Humans ordered by creation time."""

    edges: list[HumanEdge] = strawberry.field(description="List of edges (items with cursors)")
    page_info: PageInfoType = strawberry.field(description="Pagination metadata")

    @classmethod
    def from_page(cls, page: Page[Human]) -> HumanConnection:
        connection = page.to_connection()
        return cls(
            edges=[
                HumanEdge(node=HumanType.from_model(edge.node), cursor=edge.cursor)
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_schema(connection.page_info),
        )


__all__ = [
    "CharacterType",
    "DroidConnection",
    "DroidEdge",
    "DroidType",
    "EpisodeType",
    "HumanConnection",
    "HumanEdge",
    "HumanInputType",
    "HumanType",
    "to_character_type",
]
