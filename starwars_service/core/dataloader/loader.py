"""Request-scoped batching loader.

``BatchLoader`` collapses the point lookups issued while one GraphQL request
resolves its fields into as few bulk fetches as possible:

- every ``load(key)`` made during one event-loop turn lands in the same batch
- the batch is dispatched with exactly one ``fetch_many(keys)`` call
- results are joined back to the waiting futures by key, not by position
- each key is fetched at most once per loader; the slot is memoized
- callers get their own view of a slot, so cancelling one waiter leaves the
  slot intact for every other waiter of the same key

One loader instance belongs to one request. Create it in the request context
and ``close()`` it when the request ends.

Example:
    async def fetch_droids(keys: list[UUID]) -> dict[UUID, Droid]:
        return await droid_store.fetch_many(keys)

    loader = BatchLoader(fetch_droids, name="droids")
    r2d2, c3po = await asyncio.gather(loader.load(r2d2_id), loader.load(c3po_id))
    # one fetch_droids([r2d2_id, c3po_id]) call
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable, Iterable, Mapping
from typing import Generic, TypeVar

from starwars_service.core.dataloader.batch import Batch
from starwars_service.core.exceptions import (
    AppException,
    CancelledException,
    StoreFailureException,
)
from starwars_service.infra.logging import get_lazy_logger
from starwars_service.infra.metrics import (
    dataloader_batch_duration_seconds,
    dataloader_batch_size,
    dataloader_batches_total,
    dataloader_cache_hits_total,
)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

FetchMany = Callable[[list[K]], Awaitable[Mapping[K, V]]]

logger = logging.getLogger(__name__)


class BatchLoader(Generic[K, V]):
    """Batch, deduplicate and memoize lookups by key.

    Args:
        fetch_many: Bulk fetch returning a mapping of the keys it found.
            Missing keys are simply absent and resolve to ``None``.
        name: Loader name used in logs and metrics.
        max_batch_size: Close and dispatch a batch once it holds this many keys.
        auto_dispatch: Dispatch each batch at the end of the event-loop turn
            that opened it. When False, only ``flush()`` dispatches.
    """

    def __init__(
        self,
        fetch_many: FetchMany[K, V],
        *,
        name: str = "loader",
        max_batch_size: int | None = None,
        auto_dispatch: bool = True,
    ) -> None:
        if max_batch_size is not None and max_batch_size < 1:
            msg = "max_batch_size must be a positive integer"
            raise ValueError(msg)

        self.name = name
        self.max_batch_size = max_batch_size
        self.auto_dispatch = auto_dispatch
        self._fetch_many = fetch_many
        self._cache: dict[K, asyncio.Future[V | None]] = {}
        self._batch: Batch[K, V] | None = None
        self._inflight: dict[asyncio.Task[None], Batch[K, V]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False
        self._lazy = get_lazy_logger(__name__, loader=name)

    @property
    def closed(self) -> bool:
        return self._closed

    def load(self, key: K) -> asyncio.Future[V | None]:
        """Register ``key`` and return a future for its value.

        Registration is synchronous: nothing is awaited between the cache
        check and adding the key to the open batch, so concurrent resolvers
        on the same event loop can never lose or duplicate a request.

        The returned future is a shield over the cached slot. Cancelling it
        cancels only this caller's wait.
        """
        return asyncio.shield(self._slot(key))

    def _slot(self, key: K) -> asyncio.Future[V | None]:
        if self._closed:
            raise CancelledException(
                detail=f"Loader {self.name!r} is closed",
                extra={"loader": self.name},
            )

        cached = self._cache.get(key)
        if cached is not None:
            dataloader_cache_hits_total.labels(loader=self.name).inc()
            return cached

        loop = self._get_loop()
        future: asyncio.Future[V | None] = loop.create_future()
        self._cache[key] = future

        batch = self._open_batch(loop)
        batch.add(key, future)
        if self.max_batch_size is not None and len(batch) >= self.max_batch_size:
            self._close_and_dispatch(batch)
        return future

    async def load_many(self, keys: Iterable[K]) -> list[V | None]:
        """Load several keys; results follow the order of ``keys``."""
        futures = [self.load(key) for key in keys]
        if not futures:
            return []
        return list(await asyncio.gather(*futures))

    def prime(self, key: K, value: V) -> None:
        """Seed the cache with a known value unless the key is already cached."""
        if self._closed or key in self._cache:
            return
        future: asyncio.Future[V | None] = self._get_loop().create_future()
        future.set_result(value)
        self._cache[key] = future

    async def flush(self) -> None:
        """Dispatch the open batch now and wait for every in-flight dispatch.

        Cancelling the task awaiting ``flush()`` cancels the dispatches too.
        """
        if self._batch is not None:
            self._close_and_dispatch(self._batch)
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def cancel(self, reason: str = "Request was cancelled") -> None:
        """Fail every pending slot with ``CancelledException``.

        Covers both the open batch and batches whose fetch is in flight;
        in-flight fetch tasks are cancelled as well.
        """
        error = CancelledException(detail=reason, extra={"loader": self.name})
        pending = 0

        if self._batch is not None:
            batch, self._batch = self._batch, None
            batch.closed = True
            pending += batch.pending
            batch.fail(error)
            dataloader_batches_total.labels(loader=self.name, outcome="cancelled").inc()

        for task, batch in list(self._inflight.items()):
            pending += batch.pending
            batch.fail(error)
            task.cancel()

        if pending:
            logger.info(
                "Cancelled pending loads",
                extra={"loader": self.name, "pending": pending, "reason": reason},
            )

    async def close(self) -> None:
        """Cancel outstanding work and release the request-scoped cache."""
        if self._closed:
            return
        self.cancel("Loader closed before its batch completed")
        tasks = list(self._inflight)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._closed = True
        self._cache.clear()
        self._inflight.clear()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        elif self._loop is not loop:
            msg = f"Loader {self.name!r} is bound to a different event loop"
            raise RuntimeError(msg)
        return loop

    def _open_batch(self, loop: asyncio.AbstractEventLoop) -> Batch[K, V]:
        if self._batch is None:
            batch: Batch[K, V] = Batch()
            self._batch = batch
            if self.auto_dispatch:
                # Runs after every callback already scheduled for this turn,
                # i.e. after sibling resolvers have registered their keys
                loop.call_soon(self._close_and_dispatch, batch)
        return self._batch

    def _close_and_dispatch(self, batch: Batch[K, V]) -> None:
        if batch.closed:
            return
        batch.closed = True
        if self._batch is batch:
            self._batch = None

        task = self._get_loop().create_task(
            self._dispatch(batch), name=f"dataloader:{self.name}"
        )
        self._inflight[task] = batch
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._inflight.pop(task, None)

    async def _dispatch(self, batch: Batch[K, V]) -> None:
        keys = batch.keys
        dataloader_batch_size.labels(loader=self.name).observe(len(keys))
        self._lazy.debug(lambda: f"Dispatching batch of {len(keys)} keys")

        start = time.perf_counter()
        try:
            results = await self._fetch_many(keys)
            if not isinstance(results, Mapping):
                msg = f"fetch_many returned {type(results).__name__}, expected a mapping"
                raise TypeError(msg)
        except asyncio.CancelledError:
            batch.fail(
                CancelledException(
                    detail="Batch dispatch was cancelled",
                    extra={"loader": self.name, "batch_size": len(keys)},
                )
            )
            dataloader_batches_total.labels(loader=self.name, outcome="cancelled").inc()
            raise
        except AppException as exc:
            batch.fail(exc)
            dataloader_batches_total.labels(loader=self.name, outcome="error").inc()
            logger.warning(
                "Batch fetch failed: %s",
                exc.detail,
                extra={"loader": self.name, "batch_size": len(keys)},
            )
        except Exception as exc:
            error = StoreFailureException(
                detail=f"Batch fetch failed for loader {self.name!r}: {exc}",
                extra={"loader": self.name, "batch_size": len(keys)},
            )
            error.__cause__ = exc
            batch.fail(error)
            dataloader_batches_total.labels(loader=self.name, outcome="error").inc()
            logger.warning(
                "Batch fetch failed",
                exc_info=exc,
                extra={"loader": self.name, "batch_size": len(keys)},
            )
        else:
            found = batch.resolve(results)
            dataloader_batches_total.labels(loader=self.name, outcome="success").inc()
            self._lazy.debug(lambda: f"Resolved batch: {found}/{len(keys)} keys found")
        finally:
            dataloader_batch_duration_seconds.labels(loader=self.name).observe(
                time.perf_counter() - start
            )

    def __len__(self) -> int:
        """Number of cached keys."""
        return len(self._cache)

    def __repr__(self) -> str:
        return f"BatchLoader(name={self.name!r}, cached={len(self._cache)})"


__all__ = ["BatchLoader", "FetchMany"]
