"""Tests for GraphQL query resolvers."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from starwars_service.features.characters.database import (
    C3PO_ID,
    HAN_ID,
    LEIA_ID,
    LUKE_ID,
    R2D2_ID,
    TARKIN_ID,
)
from tests.graphql.conftest import (
    CHARACTER_QUERY,
    DROID_QUERY,
    DROIDS_QUERY,
    FRIENDS_QUERY,
    HUMAN_QUERY,
    HUMANS_QUERY,
)

if TYPE_CHECKING:
    from starwars_service.core.stores import OrderedStore
    from starwars_service.features.characters import CharacterRepository
    from starwars_service.features.graphql.context import GraphQLContext
    from starwars_service.features.graphql.schema import StarWarsSchema


def count_fetches(monkeypatch: pytest.MonkeyPatch, store: OrderedStore) -> list[list]:
    """Record the keys of every bulk fetch made against ``store``."""
    calls: list[list] = []
    fetch_many = store.fetch_many

    async def recording(keys):
        calls.append(list(keys))
        return await fetch_many(keys)

    monkeypatch.setattr(store, "fetch_many", recording)
    return calls


# --- Point lookups ---


@pytest.mark.asyncio
async def test_droid_query_returns_droid(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        DROID_QUERY,
        variable_values={"id": str(R2D2_ID)},
        context_value=graphql_context,
    )

    assert result.errors is None
    droid = result.data["droid"]
    assert droid["id"] == str(R2D2_ID)
    assert droid["name"] == "R2-D2"
    assert droid["appearsIn"] == ["NEWHOPE", "EMPIRE", "JEDI"]
    assert droid["primaryFunction"] == "Astromech"
    assert droid["manufactured"] == "1977-05-25T10:00:00+00:00"


@pytest.mark.asyncio
async def test_human_query_returns_human(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        HUMAN_QUERY,
        variable_values={"id": str(LUKE_ID)},
        context_value=graphql_context,
    )

    assert result.errors is None
    human = result.data["human"]
    assert human["name"] == "Luke Skywalker"
    assert human["homePlanet"] == "Tatooine"
    assert human["dateOfBirth"] == "1951-09-25"


@pytest.mark.asyncio
async def test_human_query_returns_none_for_missing(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        HUMAN_QUERY,
        variable_values={"id": str(uuid4())},
        context_value=graphql_context,
    )

    assert result.errors is None
    assert result.data["human"] is None


@pytest.mark.asyncio
async def test_droid_query_returns_none_for_invalid_id(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        DROID_QUERY,
        variable_values={"id": "not-a-uuid"},
        context_value=graphql_context,
    )

    assert result.errors is None
    assert result.data["droid"] is None


@pytest.mark.asyncio
async def test_droid_id_does_not_resolve_as_human(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        HUMAN_QUERY,
        variable_values={"id": str(C3PO_ID)},
        context_value=graphql_context,
    )

    assert result.errors is None
    assert result.data["human"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("character_id", "typename"),
    [(LUKE_ID, "Human"), (C3PO_ID, "Droid")],
)
async def test_character_query_resolves_concrete_type(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
    character_id,
    typename: str,
) -> None:
    result = await schema.execute(
        CHARACTER_QUERY,
        variable_values={"id": str(character_id)},
        context_value=graphql_context,
    )

    assert result.errors is None
    assert result.data["character"]["__typename"] == typename


# --- Batching ---


@pytest.mark.asyncio
async def test_sibling_lookups_share_one_fetch_per_store(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
    repository: CharacterRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    droid_fetches = count_fetches(monkeypatch, repository.droids)
    human_fetches = count_fetches(monkeypatch, repository.humans)
    query = f"""
    {{
        a: character(id: "{LUKE_ID}") {{ name }}
        b: character(id: "{R2D2_ID}") {{ name }}
        c: character(id: "{LEIA_ID}") {{ name }}
        d: character(id: "{LUKE_ID}") {{ name }}
    }}
    """

    result = await schema.execute(query, context_value=graphql_context)

    assert result.errors is None
    assert result.data["a"]["name"] == result.data["d"]["name"] == "Luke Skywalker"
    assert len(droid_fetches) == 1
    assert len(human_fetches) == 1
    assert sorted(map(str, human_fetches[0])) == sorted([str(LUKE_ID), str(R2D2_ID), str(LEIA_ID)])


@pytest.mark.asyncio
async def test_friends_are_batched_and_cached(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
    repository: CharacterRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    droid_fetches = count_fetches(monkeypatch, repository.droids)

    result = await schema.execute(
        FRIENDS_QUERY,
        variable_values={"id": str(LUKE_ID)},
        context_value=graphql_context,
    )

    assert result.errors is None
    friends = result.data["human"]["friends"]
    assert [f["name"] for f in friends] == ["Han Solo", "Leia Organa", "C-3PO", "R2-D2"]
    assert {f["__typename"] for f in friends} == {"Human", "Droid"}
    # 4 friends with 14 second-level friend edges; no id is ever fetched twice
    fetched = [key for call in droid_fetches for key in call]
    assert len(fetched) == len(set(fetched))
    assert len(droid_fetches) <= 2


# --- Connections ---


@pytest.mark.asyncio
async def test_droids_connection_first_page(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        DROIDS_QUERY,
        variable_values={"first": 1},
        context_value=graphql_context,
    )

    assert result.errors is None
    connection = result.data["droids"]
    assert [e["node"]["name"] for e in connection["edges"]] == ["C-3PO"]
    assert connection["pageInfo"]["hasNextPage"] is True
    assert connection["pageInfo"]["hasPreviousPage"] is False
    assert connection["pageInfo"]["totalCount"] == 2
    assert connection["pageInfo"]["endCursor"] == connection["edges"][0]["cursor"]


@pytest.mark.asyncio
async def test_humans_connection_walks_forward(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    names: list[str] = []
    after = None
    for _ in range(5):
        result = await schema.execute(
            HUMANS_QUERY,
            variable_values={"first": 2, "after": after},
            context_value=graphql_context,
        )
        assert result.errors is None
        connection = result.data["humans"]
        names.extend(e["node"]["name"] for e in connection["edges"])
        if not connection["pageInfo"]["hasNextPage"]:
            break
        after = connection["pageInfo"]["endCursor"]

    assert names == [
        "Luke Skywalker",
        "Darth Vader",
        "Han Solo",
        "Leia Organa",
        "Wilhuff Tarkin",
    ]


@pytest.mark.asyncio
async def test_humans_connection_backward(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        HUMANS_QUERY,
        variable_values={"last": 2},
        context_value=graphql_context,
    )

    assert result.errors is None
    connection = result.data["humans"]
    assert [e["node"]["id"] for e in connection["edges"]] == [str(LEIA_ID), str(TARKIN_ID)]
    assert connection["pageInfo"]["hasPreviousPage"] is True
    assert connection["pageInfo"]["hasNextPage"] is False


@pytest.mark.asyncio
async def test_connection_uses_default_page_size(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(HUMANS_QUERY, context_value=graphql_context)

    assert result.errors is None
    connection = result.data["humans"]
    assert len(connection["edges"]) == 2  # graphql_settings.default_page_size
    assert connection["pageInfo"]["hasNextPage"] is True
    assert connection["pageInfo"]["totalCount"] == 5


@pytest.mark.asyncio
async def test_connection_primes_loaders(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
    repository: CharacterRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    query = f"""
    {{
        droids(first: 2) {{ edges {{ node {{ name }} }} }}
    }}
    """
    await schema.execute(query, context_value=graphql_context)
    droid_fetches = count_fetches(monkeypatch, repository.droids)

    missing = await graphql_context.loaders.droids.load(HAN_ID)
    r2 = await graphql_context.loaders.droids.load(R2D2_ID)

    assert missing is None
    assert r2 is not None
    assert droid_fetches == [[HAN_ID]]


# --- Errors ---


@pytest.mark.asyncio
async def test_invalid_cursor_is_an_invalid_argument(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        DROIDS_QUERY,
        variable_values={"first": 1, "after": "not-a-cursor"},
        context_value=graphql_context,
    )

    assert result.errors is not None
    assert result.data is None
    extensions = result.errors[0].extensions
    assert extensions["code"] == "invalid-cursor"
    assert extensions["status"] == 400


@pytest.mark.asyncio
async def test_first_and_last_together_rejected(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        DROIDS_QUERY,
        variable_values={"first": 1, "last": 1},
        context_value=graphql_context,
    )

    assert result.errors is not None
    assert result.errors[0].extensions["code"] == "invalid-page-size"


@pytest.mark.asyncio
async def test_page_size_above_maximum_rejected(
    schema: StarWarsSchema,
    graphql_context: GraphQLContext,
) -> None:
    result = await schema.execute(
        HUMANS_QUERY,
        variable_values={"first": 11},
        context_value=graphql_context,
    )

    assert result.errors is not None
    assert result.errors[0].extensions["status"] == 400
