"""Abstract ordered entity store.

The store is the only long-lived shared resource behind the GraphQL layer.
Loaders read it by key, the paginator reads ordered snapshots, and the
mutation gateway inserts through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Any, Generic, Protocol, TypeVar
from uuid import UUID


class Entity(Protocol):
    """Anything with an identifier."""

    @property
    def id(self) -> UUID | None: ...


K = TypeVar("K", bound=Hashable)
T = TypeVar("T")

# Ordering-key extractor, e.g. ``lambda droid: droid.manufactured``
OrderingKey = Callable[[Any], Any]


class OrderedStore(ABC, Generic[K, T]):
    """Strictly ordered collection of entities keyed by identifier.

    Implementations guarantee:
    - ``snapshot()`` returns the entities in ascending ``position`` order:
      ordering key first, identifier second, so the order is strict
    - a snapshot never changes after it is returned, even if writers
      insert concurrently
    - ``fetch_many`` omits missing keys instead of raising
    - ``insert`` is all-or-nothing: a cancelled insert leaves no trace
    """

    def __init__(self, *, name: str, ordering_key: OrderingKey) -> None:
        self.name = name
        self.ordering_key = ordering_key

    def position(self, entity: Any) -> tuple[Any, Any]:
        """Sort position of an entity: ``(ordering key, id)``."""
        return (self.ordering_key(entity), entity.id)

    @abstractmethod
    async def fetch_many(self, keys: Sequence[K]) -> Mapping[K, T]:
        """Bulk lookup by identifier; absent keys are left out of the mapping."""

    @abstractmethod
    async def snapshot(self) -> Sequence[T]:
        """Immutable, ordered view of every entity."""

    @abstractmethod
    async def insert(self, entity: T) -> T:
        """Persist a new entity and return it with any store-assigned fields."""

    async def get(self, key: K) -> T | None:
        """Single lookup built on ``fetch_many``."""
        found = await self.fetch_many([key])
        return found.get(key)

    async def count(self) -> int:
        """Total number of entities."""
        return len(await self.snapshot())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["Entity", "OrderedStore", "OrderingKey"]
