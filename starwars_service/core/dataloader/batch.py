"""Batch window bookkeeping for ``BatchLoader``."""

from __future__ import annotations

import asyncio
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True, frozen=True)
class BatchRequest(Generic[K, V]):
    """One pending ``(key, future)`` pair awaiting dispatch."""

    key: K
    future: asyncio.Future[V | None]


@dataclass(slots=True)
class Batch(Generic[K, V]):
    """Requests that share one bulk fetch.

    A batch is open until the loader closes it (end of the event-loop turn,
    ``flush()``, the size limit or cancellation). Keys are distinct because
    the loader's cache answers repeated keys before they reach a batch.
    """

    requests: list[BatchRequest[K, V]] = field(default_factory=list)
    closed: bool = False

    def add(self, key: K, future: asyncio.Future[V | None]) -> None:
        if self.closed:
            msg = "Cannot add a request to a closed batch"
            raise RuntimeError(msg)
        self.requests.append(BatchRequest(key=key, future=future))

    @property
    def keys(self) -> list[K]:
        return [request.key for request in self.requests]

    @property
    def pending(self) -> int:
        """Number of slots not yet resolved or failed."""
        return sum(1 for request in self.requests if not request.future.done())

    def resolve(self, results: Mapping[K, V]) -> int:
        """Resolve every slot by key lookup; absent keys resolve to ``None``.

        Returns:
            Number of keys found in ``results``.
        """
        found = 0
        for request in self.requests:
            if request.future.done():
                continue
            value = results.get(request.key)
            if value is not None:
                found += 1
            request.future.set_result(value)
        return found

    def fail(self, error: BaseException) -> None:
        """Fail every unresolved slot with the same exception instance."""
        for request in self.requests:
            if not request.future.done():
                request.future.set_exception(error)

    def __len__(self) -> int:
        return len(self.requests)


__all__ = ["Batch", "BatchRequest"]
