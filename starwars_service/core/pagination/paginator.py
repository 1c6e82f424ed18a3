"""Cursor pagination over an ordered store.

Pages are cut from one snapshot of the store with a single predicate:

- ``after`` / ``before`` cursors become ``position > after`` /
  ``position < before``, where a position is ``(ordering key, id)``
- the optional caller ``where`` is combined into the same predicate
- the predicate is applied once, lazily, while the page body is taken

Forward pages (``first``) take the leading items and look one element
further along the same iterator to decide ``has_next``. Backward pages
(``last``) keep the trailing items in a bounded deque and count what fell
out of it to decide ``has_previous``. Body and flags therefore always agree.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from itertools import islice
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from starwars_service.core.exceptions import InvalidArgumentException
from starwars_service.core.pagination.cursor import CursorCodec, CursorPosition
from starwars_service.core.pagination.schemas import Connection, Edge, PageInfo

if TYPE_CHECKING:
    from starwars_service.core.stores import OrderedStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Predicate = Callable[[Any], bool]

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of items with its navigation flags.

    Attributes:
        items: Page body in store order
        has_next: Matching items exist after the body (forward pages only)
        has_previous: Matching items exist before the body (backward pages only)
        cursors: Cursor of each item, aligned with ``items``
        total_count: Size of the whole collection, when requested
    """

    items: tuple[T, ...]
    has_next: bool
    has_previous: bool
    cursors: tuple[str, ...] = ()
    total_count: int | None = None

    @property
    def start_cursor(self) -> str | None:
        return self.cursors[0] if self.cursors else None

    @property
    def end_cursor(self) -> str | None:
        return self.cursors[-1] if self.cursors else None

    def to_connection(self) -> Connection[T]:
        """Convert to the Relay connection shape."""
        return Connection[Any](
            edges=[
                Edge[Any](node=item, cursor=cursor)
                for item, cursor in zip(self.items, self.cursors, strict=True)
            ],
            page_info=PageInfo(
                has_previous_page=self.has_previous,
                has_next_page=self.has_next,
                start_cursor=self.start_cursor,
                end_cursor=self.end_cursor,
                total_count=self.total_count,
            ),
        )

    def __len__(self) -> int:
        return len(self.items)


class Paginator(Generic[T]):
    """Cut pages from an ordered store.

    Args:
        store: The ordered collection to page through
        codec: Cursor codec (``encode``/``decode_position`` static methods)
        max_page_size: Largest accepted ``first``/``last``; None disables the cap

    Example:
        paginator = Paginator(droid_store, max_page_size=100)
        page = await paginator.page(first=10)
        next_page = await paginator.page(first=10, after=page.end_cursor)
    """

    def __init__(
        self,
        store: OrderedStore[Any, T],
        *,
        codec: type[CursorCodec] = CursorCodec,
        max_page_size: int | None = None,
    ) -> None:
        self.store = store
        self.codec = codec
        self.max_page_size = max_page_size

    async def page(
        self,
        *,
        first: int | None = None,
        after: str | None = None,
        last: int | None = None,
        before: str | None = None,
        where: Predicate | None = None,
        include_total: bool = False,
    ) -> Page[T]:
        """Return one page.

        With neither ``first`` nor ``last`` the whole filtered sequence is
        returned and both flags are False.

        Raises:
            InvalidArgumentException: ``first`` and ``last`` both given, a
                negative or oversized page size, or an undecodable cursor
        """
        self._check_sizes(first, last)
        after_position = self._decode("after", after)
        before_position = self._decode("before", before)

        snapshot = await self.store.snapshot()
        position = self.store.position
        if snapshot:
            sample = self.store.ordering_key(snapshot[0])
            self._check_cursor_type("after", after_position, sample)
            self._check_cursor_type("before", before_position, sample)

        predicate = self._build_predicate(position, after_position, before_position, where)
        matching = (entity for entity in snapshot if predicate(entity))

        has_next = has_previous = False
        if first is not None:
            items = tuple(islice(matching, first))
            has_next = next(matching, _MISSING) is not _MISSING
        elif last is not None:
            window: deque[T] = deque(maxlen=last)
            seen = 0
            for entity in matching:
                window.append(entity)
                seen += 1
            items = tuple(window)
            has_previous = seen > last
        else:
            items = tuple(matching)

        logger.debug(
            "Paginated %s",
            self.store.name,
            extra={
                "store": self.store.name,
                "first": first,
                "last": last,
                "returned": len(items),
                "has_next": has_next,
                "has_previous": has_previous,
            },
        )
        return Page(
            items=items,
            has_next=has_next,
            has_previous=has_previous,
            cursors=tuple(self.codec.encode(*position(item)) for item in items),
            total_count=len(snapshot) if include_total else None,
        )

    def _check_sizes(self, first: int | None, last: int | None) -> None:
        if first is not None and last is not None:
            raise InvalidArgumentException(
                detail="Passing both first and last to paginate a connection is not supported",
                type="invalid-page-size",
                extra={"first": first, "last": last},
            )
        for argument, value in (("first", first), ("last", last)):
            if value is None:
                continue
            if value < 0:
                raise InvalidArgumentException(
                    detail=f"{argument} must not be negative",
                    type="invalid-page-size",
                    extra={argument: value},
                )
            if self.max_page_size is not None and value > self.max_page_size:
                raise InvalidArgumentException(
                    detail=f"{argument} must not exceed {self.max_page_size}",
                    type="invalid-page-size",
                    extra={argument: value, "max_page_size": self.max_page_size},
                )

    def _decode(self, argument: str, cursor: str | None) -> CursorPosition | None:
        if cursor is None:
            return None
        try:
            return self.codec.decode_position(cursor)
        except InvalidArgumentException as exc:
            raise InvalidArgumentException(
                detail=f"Invalid {argument} cursor",
                type="invalid-cursor",
                extra={"argument": argument, "cursor": cursor},
            ) from exc

    def _check_cursor_type(
        self, argument: str, bound: CursorPosition | None, sample: Any
    ) -> None:
        if bound is None:
            return
        value = bound.value
        mismatch = type(value) is not type(sample)
        if isinstance(value, datetime) and not mismatch:
            # aware and naive datetimes do not compare
            mismatch = (value.tzinfo is None) != (sample.tzinfo is None)
        if mismatch:
            raise InvalidArgumentException(
                detail=f"{argument} cursor does not belong to {self.store.name}",
                type="invalid-cursor",
                extra={"argument": argument, "store": self.store.name},
            )

    @staticmethod
    def _build_predicate(
        position: Callable[[Any], tuple[Any, Any]],
        after: CursorPosition | None,
        before: CursorPosition | None,
        where: Predicate | None,
    ) -> Predicate:
        # A cursor without an id bounds by value alone, past every tie
        def predicate(entity: Any) -> bool:
            key, entity_id = position(entity)
            if after is not None:
                if after.id is None:
                    if not key > after.value:
                        return False
                elif not (key, entity_id) > after:
                    return False
            if before is not None:
                if before.id is None:
                    if not key < before.value:
                        return False
                elif not (key, entity_id) < before:
                    return False
            return where is None or where(entity)

        return predicate


async def paginate(
    store: OrderedStore[Any, T],
    *,
    first: int | None = None,
    after: str | None = None,
    last: int | None = None,
    before: str | None = None,
    where: Predicate | None = None,
    codec: type[CursorCodec] = CursorCodec,
    max_page_size: int | None = None,
    include_total: bool = False,
) -> Page[T]:
    """Return one page of ``store``; see ``Paginator.page``."""
    paginator: Paginator[T] = Paginator(store, codec=codec, max_page_size=max_page_size)
    return await paginator.page(
        first=first,
        after=after,
        last=last,
        before=before,
        where=where,
        include_total=include_total,
    )


__all__ = ["Page", "Paginator", "Predicate", "paginate"]
