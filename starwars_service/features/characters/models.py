"""Domain models for Star Wars characters.

Entities are frozen; a change is a ``model_copy(update=...)`` that the store
publishes as a replacement, never an in-place edit.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class Episode(str, Enum):
    """Films of the original trilogy."""

    NEWHOPE = "NEWHOPE"
    EMPIRE = "EMPIRE"
    JEDI = "JEDI"


class Character(BaseModel):
    """Attributes shared by every character."""

    model_config = ConfigDict(frozen=True)

    id: UUID | None = Field(default=None, description="Assigned by the store on insert")
    name: str = Field(..., min_length=1, max_length=100)
    friends: tuple[UUID, ...] = Field(default=(), description="Identifiers of friends")
    appears_in: tuple[Episode, ...] = Field(default=())


class Droid(Character):
    """A droid, ordered by manufacture date."""

    chassis_number: str | None = None
    manufactured: AwareDatetime
    primary_function: str | None = None


class Human(Character):
    """A human, ordered by creation time."""

    home_planet: str | None = None
    date_of_birth: date | None = None
    created: AwareDatetime
    modified: AwareDatetime


class HumanInput(BaseModel):
    """Client-supplied fields of a new human.

    Identifier and timestamps are server-assigned and cannot be sent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    home_planet: str | None = Field(default=None, max_length=100)
    date_of_birth: date | None = None
    appears_in: tuple[Episode, ...] = ()
    friends: tuple[UUID, ...] = ()


def droid_ordering_key(droid: Droid) -> datetime:
    return droid.manufactured


def human_ordering_key(human: Human) -> datetime:
    return human.created


__all__ = [
    "Character",
    "Droid",
    "Episode",
    "Human",
    "HumanInput",
    "droid_ordering_key",
    "human_ordering_key",
]
