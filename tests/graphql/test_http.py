"""End-to-end tests for the GraphQL and metrics HTTP endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from starwars_service.features.characters.database import C3PO_ID, LUKE_ID
from starwars_service.features.graphql.router import CORRELATION_HEADER
from tests.conftest import FROZEN_NOW
from tests.graphql.conftest import CREATE_HUMAN_MUTATION, DROID_QUERY, FRIENDS_QUERY

if TYPE_CHECKING:
    from httpx import AsyncClient


@pytest.mark.asyncio
async def test_graphql_query_over_http(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": DROID_QUERY, "variables": {"id": str(C3PO_ID)}},
    )

    assert response.status_code == 200
    body = response.json()
    assert "errors" not in body
    assert body["data"]["droid"]["name"] == "C-3PO"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": DROID_QUERY, "variables": {"id": str(C3PO_ID)}},
        headers={CORRELATION_HEADER: "req-42"},
    )

    assert response.headers[CORRELATION_HEADER] == "req-42"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": DROID_QUERY, "variables": {"id": str(C3PO_ID)}},
    )

    assert len(response.headers[CORRELATION_HEADER]) == 32


@pytest.mark.asyncio
@pytest.mark.parametrize("supplied", ["x" * 129, "id with spaces", "<script>"])
async def test_unsafe_correlation_id_is_replaced(client: AsyncClient, supplied: str) -> None:
    response = await client.post(
        "/graphql",
        json={"query": DROID_QUERY, "variables": {"id": str(C3PO_ID)}},
        headers={CORRELATION_HEADER: supplied},
    )

    echoed = response.headers[CORRELATION_HEADER]
    assert echoed != supplied
    assert len(echoed) == 32
    assert int(echoed, 16) >= 0


@pytest.mark.asyncio
async def test_mutation_uses_application_clock(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": CREATE_HUMAN_MUTATION, "variables": {"human": {"name": "Wedge Antilles"}}},
    )

    assert response.status_code == 200
    assert response.json()["data"]["createHuman"]["created"] == FROZEN_NOW.isoformat()


@pytest.mark.asyncio
async def test_loader_cache_is_per_request(client: AsyncClient) -> None:
    """A human created in one request is visible to the next one."""
    created = await client.post(
        "/graphql",
        json={
            "query": CREATE_HUMAN_MUTATION,
            "variables": {"human": {"name": "Wedge Antilles", "friends": [str(LUKE_ID)]}},
        },
    )
    new_id = created.json()["data"]["createHuman"]["id"]

    response = await client.post(
        "/graphql",
        json={"query": FRIENDS_QUERY, "variables": {"id": new_id}},
    )

    assert response.json()["data"]["human"]["friends"][0]["name"] == "Luke Skywalker"


@pytest.mark.asyncio
async def test_application_error_extensions_over_http(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": "{ droids(first: -1) { edges { cursor } } }"},
    )

    assert response.status_code == 200
    error = response.json()["errors"][0]
    assert error["extensions"]["code"] == "invalid-page-size"
    assert error["extensions"]["status"] == 400


@pytest.mark.asyncio
async def test_metrics_endpoint_reports_batches(client: AsyncClient) -> None:
    await client.post(
        "/graphql",
        json={"query": FRIENDS_QUERY, "variables": {"id": str(LUKE_ID)}},
    )

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert 'dataloader_batches_total{loader="characters",outcome="success"}' in response.text
