"""Seed data and store factories for the character catalogue."""

from __future__ import annotations

from datetime import UTC, date, datetime
from uuid import UUID

from starwars_service.core.stores import InMemoryOrderedStore
from starwars_service.features.characters.models import (
    Droid,
    Episode,
    Human,
    droid_ordering_key,
    human_ordering_key,
)

LUKE_ID = UUID("94fbd693-2027-4804-bf40-ed427fe76fda")
VADER_ID = UUID("c2bbf949-764b-4d4f-bce6-0404211810fa")
HAN_ID = UUID("41f0a9c7-3e5f-4b3c-9c2e-56a3d9b1f0a1")
LEIA_ID = UUID("d8b8a4d4-3c0c-4d5a-9b8f-2c9b7a1e6f3d")
TARKIN_ID = UUID("4c6bd5b2-6f0d-4a4b-8f5e-8a4e2b7c9d10")
C3PO_ID = UUID("1ae34c3b-c1a0-4b7b-9375-c5a221d49e68")
R2D2_ID = UUID("c8d8bb12-cb2a-4f8e-8a26-4c5f5e8d2a9b")

ALL_EPISODES = (Episode.NEWHOPE, Episode.EMPIRE, Episode.JEDI)

# Fixed instant the seed humans were recorded at
SEEDED_AT = datetime(2020, 1, 1, tzinfo=UTC)


def seed_droids() -> list[Droid]:
    return [
        Droid(
            id=C3PO_ID,
            name="C-3PO",
            friends=(LUKE_ID, HAN_ID, LEIA_ID, R2D2_ID),
            appears_in=ALL_EPISODES,
            chassis_number="3PO-0001",
            manufactured=datetime(1977, 5, 25, 9, 0, tzinfo=UTC),
            primary_function="Protocol",
        ),
        Droid(
            id=R2D2_ID,
            name="R2-D2",
            friends=(LUKE_ID, HAN_ID, LEIA_ID),
            appears_in=ALL_EPISODES,
            chassis_number="R2-0002",
            manufactured=datetime(1977, 5, 25, 10, 0, tzinfo=UTC),
            primary_function="Astromech",
        ),
    ]


def seed_humans() -> list[Human]:
    people = [
        (LUKE_ID, "Luke Skywalker", "Tatooine", date(1951, 9, 25), (HAN_ID, LEIA_ID, C3PO_ID, R2D2_ID)),
        (VADER_ID, "Darth Vader", "Tatooine", date(1931, 1, 19), (TARKIN_ID,)),
        (HAN_ID, "Han Solo", "Corellia", date(1942, 7, 13), (LUKE_ID, LEIA_ID, R2D2_ID)),
        (LEIA_ID, "Leia Organa", "Alderaan", date(1956, 10, 21), (LUKE_ID, HAN_ID, C3PO_ID, R2D2_ID)),
        (TARKIN_ID, "Wilhuff Tarkin", "Eriadu", None, (VADER_ID,)),
    ]
    humans = []
    for offset, (id_, name, planet, born, friends) in enumerate(people):
        stamp = SEEDED_AT.replace(minute=offset)
        humans.append(
            Human(
                id=id_,
                name=name,
                friends=friends,
                appears_in=ALL_EPISODES if id_ != TARKIN_ID else (Episode.NEWHOPE,),
                home_planet=planet,
                date_of_birth=born,
                created=stamp,
                modified=stamp,
            )
        )
    return humans


def create_droid_store(*, latency: float = 0.0, seed: bool = True) -> InMemoryOrderedStore[Droid]:
    return InMemoryOrderedStore(
        name="droids",
        ordering_key=droid_ordering_key,
        entities=seed_droids() if seed else (),
        latency=latency,
    )


def create_human_store(*, latency: float = 0.0, seed: bool = True) -> InMemoryOrderedStore[Human]:
    return InMemoryOrderedStore(
        name="humans",
        ordering_key=human_ordering_key,
        entities=seed_humans() if seed else (),
        latency=latency,
    )


__all__ = [
    "C3PO_ID",
    "HAN_ID",
    "LEIA_ID",
    "LUKE_ID",
    "R2D2_ID",
    "TARKIN_ID",
    "VADER_ID",
    "create_droid_store",
    "create_human_store",
    "seed_droids",
    "seed_humans",
]
