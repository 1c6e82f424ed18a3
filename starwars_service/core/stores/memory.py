"""In-memory ordered store with copy-on-write snapshots."""

from __future__ import annotations

import asyncio
import bisect
import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel

from starwars_service.core.exceptions import InvalidArgumentException
from starwars_service.core.stores.base import OrderedStore, OrderingKey

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class InMemoryOrderedStore(OrderedStore[UUID, M]):
    """Ordered store for frozen pydantic entities keyed by ``id``.

    Writers are serialised with an ``asyncio.Lock`` and publish a new tuple
    (and id index) in one step once the write is complete, so readers holding
    an older snapshot never observe a half-applied insert.

    Args:
        name: Collection name used in logs and errors.
        ordering_key: Extracts the ordering key from an entity.
        entities: Initial contents, in any order.
        latency: Simulated storage round-trip in seconds for reads and writes.

    Example:
        store = InMemoryOrderedStore(
            name="droids",
            ordering_key=lambda droid: droid.manufactured,
            entities=seed_droids(),
        )
        droids = await store.fetch_many([r2d2_id, c3po_id])
    """

    def __init__(
        self,
        *,
        name: str,
        ordering_key: OrderingKey,
        entities: Iterable[M] = (),
        latency: float = 0.0,
    ) -> None:
        super().__init__(name=name, ordering_key=ordering_key)
        self.latency = latency
        self._lock = asyncio.Lock()
        initial = list(entities)
        if any(entity.id is None for entity in initial):
            msg = f"Initial contents of {name!r} must carry identifiers"
            raise ValueError(msg)
        ordered = sorted(initial, key=self.position)
        self._entities: tuple[M, ...] = tuple(ordered)
        self._by_id: dict[Hashable, M] = {entity.id: entity for entity in ordered}
        if len(self._by_id) != len(self._entities):
            msg = f"Duplicate identifiers in initial contents of {name!r}"
            raise ValueError(msg)

    async def fetch_many(self, keys: Sequence[UUID]) -> Mapping[UUID, M]:
        await self._simulate_latency()
        index = self._by_id
        return {key: index[key] for key in keys if key in index}

    async def snapshot(self) -> Sequence[M]:
        return self._entities

    async def count(self) -> int:
        return len(self._entities)

    async def insert(self, entity: M) -> M:
        if self.ordering_key(entity) is None:
            raise InvalidArgumentException(
                detail=f"Entity for {self.name!r} has no ordering key value",
                extra={"store": self.name},
            )

        async with self._lock:
            if getattr(entity, "id", None) is None:
                entity = entity.model_copy(update={"id": uuid4()})
            elif entity.id in self._by_id:
                raise InvalidArgumentException(
                    detail=f"{self.name} entity {entity.id} already exists",
                    type="duplicate-id",
                    extra={"store": self.name, "id": str(entity.id)},
                )

            await self._simulate_latency()

            # Publish only after the last await so cancellation cannot leave
            # a partially visible record
            entities = list(self._entities)
            index = bisect.bisect_right(entities, self.position(entity), key=self.position)
            entities.insert(index, entity)
            by_id = dict(self._by_id)
            by_id[entity.id] = entity

            self._entities = tuple(entities)
            self._by_id = by_id

        logger.debug(
            "Inserted entity",
            extra={"store": self.name, "entity_id": str(entity.id), "position": index},
        )
        return entity

    async def _simulate_latency(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)


__all__ = ["InMemoryOrderedStore"]
