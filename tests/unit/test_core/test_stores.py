"""Unit tests for the in-memory ordered store."""

from __future__ import annotations

import asyncio
from uuid import UUID

import pytest
from pydantic import BaseModel, ConfigDict

from starwars_service.core.exceptions import InvalidArgumentException
from starwars_service.core.stores import InMemoryOrderedStore, OrderedStore


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    position: int | None
    label: str = ""


def make_store(*positions: int, latency: float = 0.0) -> InMemoryOrderedStore[Record]:
    return InMemoryOrderedStore(
        name="records",
        ordering_key=lambda record: record.position,
        entities=[Record(id=UUID(int=p), position=p) for p in positions],
        latency=latency,
    )


@pytest.mark.asyncio
async def test_snapshot_sorted_by_ordering_key() -> None:
    store = make_store(3, 1, 2)

    snapshot = await store.snapshot()

    assert [record.position for record in snapshot] == [1, 2, 3]
    assert isinstance(store, OrderedStore)


@pytest.mark.asyncio
async def test_fetch_many_omits_missing_keys() -> None:
    store = make_store(1, 2)

    found = await store.fetch_many([UUID(int=1), UUID(int=99)])

    assert list(found) == [UUID(int=1)]
    assert await store.get(UUID(int=99)) is None
    assert (await store.get(UUID(int=2))).position == 2


@pytest.mark.asyncio
async def test_insert_assigns_id_and_keeps_order() -> None:
    store = make_store(1, 3)

    created = await store.insert(Record(position=2))

    assert created.id is not None
    assert [record.position for record in await store.snapshot()] == [1, 2, 3]
    assert await store.get(created.id) == created
    assert await store.count() == 3


@pytest.mark.asyncio
async def test_ties_ordered_by_id() -> None:
    store = make_store()

    await store.insert(Record(id=UUID(int=9), position=5, label="first"))
    await store.insert(Record(id=UUID(int=4), position=5, label="second"))
    await store.insert(Record(id=UUID(int=6), position=1))

    assert [record.id.int for record in await store.snapshot()] == [6, 4, 9]
    assert store.position(Record(id=UUID(int=4), position=5)) == (5, UUID(int=4))


@pytest.mark.asyncio
async def test_snapshot_is_not_affected_by_later_insert() -> None:
    store = make_store(1, 2)
    before = await store.snapshot()

    await store.insert(Record(position=0))

    assert len(before) == 2
    assert len(await store.snapshot()) == 3


@pytest.mark.asyncio
async def test_insert_rejects_duplicate_id() -> None:
    store = make_store(1)

    with pytest.raises(InvalidArgumentException) as exc_info:
        await store.insert(Record(id=UUID(int=1), position=7))

    assert exc_info.value.type == "duplicate-id"


@pytest.mark.asyncio
async def test_insert_requires_ordering_key() -> None:
    store = make_store()

    with pytest.raises(InvalidArgumentException):
        await store.insert(Record(position=None))


@pytest.mark.asyncio
async def test_cancelled_insert_leaves_no_trace() -> None:
    store = make_store(1, latency=10)

    task = asyncio.create_task(store.insert(Record(position=2)))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert await store.count() == 1


def test_duplicate_initial_ids_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate"):
        InMemoryOrderedStore(
            name="dupes",
            ordering_key=lambda record: record.position,
            entities=[Record(id=UUID(int=1), position=1), Record(id=UUID(int=1), position=2)],
        )


def test_initial_contents_require_ids() -> None:
    with pytest.raises(ValueError, match="identifiers"):
        InMemoryOrderedStore(
            name="anonymous",
            ordering_key=lambda record: record.position,
            entities=[Record(position=1)],
        )
