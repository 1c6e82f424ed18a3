"""DataLoaders for batch-loading droids, humans and mixed characters.

Prevents N+1 lookups when resolving ``droid(id)``, ``human(id)`` and every
``friends`` list in one query: all ids requested in the same event-loop
turn reach the store in one ``fetch_many`` call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starwars_service.features.graphql.dataloaders.base import EntityDataLoader

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from starwars_service.features.characters import (
        Character,
        CharacterRepository,
        Droid,
        Human,
    )


class DroidDataLoader(EntityDataLoader["Droid"]):
    """Batch-load droids by ID.

    Usage:
        loader = DroidDataLoader(repository)
        droid = await loader.load(uuid)  # Batched with other loads
        r2d2 = await loader.load(uuid, required=True)  # NotFoundException if absent
    """

    name = "droids"

    def __init__(self, repository: CharacterRepository, **options: int | bool | None) -> None:
        self._repository = repository
        super().__init__(**options)

    async def _batch_load(self, ids: list[UUID]) -> Mapping[UUID, Droid]:
        return await self._repository.get_droids(ids)


class HumanDataLoader(EntityDataLoader["Human"]):
    """Batch-load humans by ID."""

    name = "humans"

    def __init__(self, repository: CharacterRepository, **options: int | bool | None) -> None:
        self._repository = repository
        super().__init__(**options)

    async def _batch_load(self, ids: list[UUID]) -> Mapping[UUID, Human]:
        return await self._repository.get_humans(ids)


class CharacterDataLoader(EntityDataLoader["Character"]):
    """Batch-load characters of any kind by ID.

    Used for ``friends`` lists, which mix droids and humans. One dispatch
    issues one ``fetch_many`` per store.
    """

    name = "characters"

    def __init__(self, repository: CharacterRepository, **options: int | bool | None) -> None:
        self._repository = repository
        super().__init__(**options)

    async def _batch_load(self, ids: list[UUID]) -> Mapping[UUID, Character]:
        return await self._repository.get_characters(ids)


__all__ = ["CharacterDataLoader", "DroidDataLoader", "HumanDataLoader"]
