"""Strawberry GraphQL types."""

from starwars_service.features.graphql.types.base import PageInfoType
from starwars_service.features.graphql.types.characters import (
    CharacterType,
    DroidConnection,
    DroidEdge,
    DroidType,
    EpisodeType,
    HumanConnection,
    HumanEdge,
    HumanInputType,
    HumanType,
    to_character_type,
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
    "PageInfoType",
    "to_character_type",
]
