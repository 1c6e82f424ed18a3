"""Repository over the droid and human stores."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from starwars_service.core.pagination import Page, Paginator
from starwars_service.features.characters.database import create_droid_store, create_human_store
from starwars_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from starwars_service.core.stores import OrderedStore
    from starwars_service.features.characters.models import Character, Droid, Human


class CharacterRepository:
    """Read access to every character collection.

    Point lookups return mappings that leave out missing ids, which is what
    the batch loaders expect. Pages are cut with the shared paginator.
    """

    def __init__(
        self,
        droids: OrderedStore[UUID, Droid],
        humans: OrderedStore[UUID, Human],
        *,
        max_page_size: int | None = None,
    ) -> None:
        self.droids = droids
        self.humans = humans
        self.max_page_size = max_page_size
        self._lazy = get_lazy_logger(__name__)

    async def get_droids(self, ids: Sequence[UUID]) -> Mapping[UUID, Droid]:
        found = await self.droids.fetch_many(ids)
        self._lazy.debug(lambda: f"repo.get_droids({len(ids)} ids) -> {len(found)} found")
        return found

    async def get_humans(self, ids: Sequence[UUID]) -> Mapping[UUID, Human]:
        found = await self.humans.fetch_many(ids)
        self._lazy.debug(lambda: f"repo.get_humans({len(ids)} ids) -> {len(found)} found")
        return found

    async def get_characters(self, ids: Sequence[UUID]) -> dict[UUID, Character]:
        """Look ids up in both collections at once; one fetch per store."""
        droids, humans = await asyncio.gather(self.get_droids(ids), self.get_humans(ids))
        return {**humans, **droids}

    async def page_droids(
        self,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        include_total: bool = False,
        max_page_size: int | None = None,
    ) -> Page[Droid]:
        paginator = Paginator(self.droids, max_page_size=max_page_size or self.max_page_size)
        return await paginator.page(
            first=first, after=after, last=last, before=before, include_total=include_total
        )

    async def page_humans(
        self,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        include_total: bool = False,
        max_page_size: int | None = None,
    ) -> Page[Human]:
        paginator = Paginator(self.humans, max_page_size=max_page_size or self.max_page_size)
        return await paginator.page(
            first=first, after=after, last=last, before=before, include_total=include_total
        )


def create_character_repository(
    *, latency: float = 0.0, max_page_size: int | None = None
) -> CharacterRepository:
    """Build a repository over freshly seeded in-memory stores."""
    return CharacterRepository(
        create_droid_store(latency=latency),
        create_human_store(latency=latency),
        max_page_size=max_page_size,
    )


__all__ = ["CharacterRepository", "create_character_repository"]
