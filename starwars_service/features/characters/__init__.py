"""Star Wars character catalogue: droids and humans."""

from __future__ import annotations

from .database import create_droid_store, create_human_store, seed_droids, seed_humans
from .models import Character, Droid, Episode, Human, HumanInput
from .repository import CharacterRepository, create_character_repository

__all__ = [
    "Character",
    "CharacterRepository",
    "Droid",
    "Episode",
    "Human",
    "HumanInput",
    "create_character_repository",
    "create_droid_store",
    "create_human_store",
    "seed_droids",
    "seed_humans",
]
