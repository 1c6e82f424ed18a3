"""DataLoader container and factory.

DataLoaders batch and cache store lookups within a single request,
preventing N+1 problems common in GraphQL resolvers.

Each GraphQL request gets its own DataLoaders instance so batching
boundaries and caches never leak between requests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from starwars_service.features.graphql.dataloaders.base import EntityDataLoader, loader_options
from starwars_service.features.graphql.dataloaders.characters import (
    CharacterDataLoader,
    DroidDataLoader,
    HumanDataLoader,
)

if TYPE_CHECKING:
    from starwars_service.core.settings import DataLoaderSettings
    from starwars_service.features.characters import CharacterRepository


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    One instance created per GraphQL request.

    Usage in resolver:
        ctx = info.context
        droid = await ctx.loaders.droids.load(droid_id)
    """

    droids: DroidDataLoader
    humans: HumanDataLoader
    characters: CharacterDataLoader

    def all(self) -> list[EntityDataLoader]:
        return [getattr(self, f.name) for f in fields(self)]

    def cancel(self, reason: str = "Request was cancelled") -> None:
        """Fail every pending load of this request."""
        for loader in self.all():
            loader.cancel(reason)

    async def close(self) -> None:
        """Release every loader; called when the request ends."""
        await asyncio.gather(*(loader.close() for loader in self.all()))


def create_dataloaders(
    repository: CharacterRepository,
    settings: DataLoaderSettings | None = None,
) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        repository: Character repository shared by the application
        settings: Batch size and dispatch options

    Returns:
        DataLoaders container with all loaders initialized
    """
    options = loader_options(settings)
    return DataLoaders(
        droids=DroidDataLoader(repository, **options),
        humans=HumanDataLoader(repository, **options),
        characters=CharacterDataLoader(repository, **options),
    )


__all__ = [
    "CharacterDataLoader",
    "DataLoaders",
    "DroidDataLoader",
    "EntityDataLoader",
    "HumanDataLoader",
    "create_dataloaders",
]
