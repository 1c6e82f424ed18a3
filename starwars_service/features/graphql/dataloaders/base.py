"""Shared wrapper around ``BatchLoader`` for feature loaders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from starwars_service.core.dataloader import BatchLoader
from starwars_service.core.exceptions import NotFoundException

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID

V = TypeVar("V")


class EntityDataLoader(ABC, Generic[V]):
    """Request-scoped loader of one entity kind by UUID.

    Subclasses implement ``_batch_load`` as a single bulk lookup that
    returns a mapping of the ids it found.

    A resolver that gets cancelled while awaiting ``load`` does not cancel
    the slot for siblings waiting on the same key.
    """

    #: Loader name used in logs, metrics and errors
    name: str = "entities"

    def __init__(self, *, max_batch_size: int | None = None, auto_dispatch: bool = True) -> None:
        self._loader: BatchLoader[UUID, V] = BatchLoader(
            self._batch_load,
            name=self.name,
            max_batch_size=max_batch_size,
            auto_dispatch=auto_dispatch,
        )

    @abstractmethod
    async def _batch_load(self, ids: list[UUID]) -> Mapping[UUID, V]:
        """Fetch every id in one call; absent ids are left out."""

    @property
    def loader(self) -> BatchLoader[UUID, V]:
        return self._loader

    async def load(self, id_: UUID, *, required: bool = False) -> V | None:
        """Load one entity, batched with every other load of this turn.

        Args:
            id_: Entity UUID
            required: Raise ``NotFoundException`` instead of returning None

        Returns:
            The entity, or None when it does not exist and ``required`` is False
        """
        value = await self._loader.load(id_)
        if value is None and required:
            raise NotFoundException(
                detail=f"No {self.name} entry with ID {id_}",
                type=f"{self.name}-not-found",
                extra={"id": str(id_)},
            )
        return value

    async def load_many(self, ids: Iterable[UUID]) -> list[V | None]:
        """Load several entities; results follow the order of ``ids``."""
        return await self._loader.load_many(ids)

    def prime(self, id_: UUID, value: V) -> None:
        self._loader.prime(id_, value)

    def cancel(self, reason: str = "Request was cancelled") -> None:
        self._loader.cancel(reason)

    async def close(self) -> None:
        await self._loader.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._loader!r})"


def loader_options(settings: Any | None) -> dict[str, Any]:
    """Keyword arguments for ``EntityDataLoader`` from ``DataLoaderSettings``."""
    if settings is None:
        return {}
    return {
        "max_batch_size": settings.max_batch_size,
        "auto_dispatch": settings.auto_dispatch,
    }


__all__ = ["EntityDataLoader", "loader_options"]
