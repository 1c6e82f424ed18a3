"""GraphQL test fixtures.

Provides:
- The schema built from default settings
- A GraphQL context over freshly seeded stores and a frozen clock
- Query documents shared by the query, mutation and HTTP tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from starwars_service.core.settings import DataLoaderSettings, GraphQLSettings
from starwars_service.features.graphql.context import GraphQLContext
from starwars_service.features.graphql.dataloaders import create_dataloaders
from starwars_service.features.graphql.schema import StarWarsSchema, create_schema

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starwars_service.core.clock import FrozenClock
    from starwars_service.features.characters import CharacterRepository


@pytest.fixture
def schema() -> StarWarsSchema:
    return create_schema(GraphQLSettings())


@pytest.fixture
def graphql_settings() -> GraphQLSettings:
    return GraphQLSettings(default_page_size=2, max_page_size=10)


@pytest.fixture
async def graphql_context(
    repository: CharacterRepository,
    frozen_clock: FrozenClock,
    graphql_settings: GraphQLSettings,
) -> AsyncGenerator[GraphQLContext]:
    """Create GraphQL context without an HTTP request."""
    loaders = create_dataloaders(repository, DataLoaderSettings())
    yield GraphQLContext(
        repository=repository,
        loaders=loaders,
        settings=graphql_settings,
        clock=frozen_clock,
        correlation_id="test-correlation-id",
    )
    await loaders.close()


# GraphQL query strings for testing
DROID_QUERY = """
query GetDroid($id: ID!) {
    droid(id: $id) {
        id
        name
        appearsIn
        chassisNumber
        manufactured
        primaryFunction
    }
}
"""

HUMAN_QUERY = """
query GetHuman($id: ID!) {
    human(id: $id) {
        id
        name
        homePlanet
        dateOfBirth
        created
        modified
    }
}
"""

CHARACTER_QUERY = """
query GetCharacter($id: ID!) {
    character(id: $id) {
        __typename
        id
        name
    }
}
"""

FRIENDS_QUERY = """
query GetFriends($id: ID!) {
    human(id: $id) {
        name
        friends {
            __typename
            name
            friends {
                name
            }
        }
    }
}
"""

DROIDS_QUERY = """
query GetDroids($first: Int, $after: String, $last: Int, $before: String) {
    droids(first: $first, after: $after, last: $last, before: $before) {
        edges {
            cursor
            node {
                id
                name
            }
        }
        pageInfo {
            hasNextPage
            hasPreviousPage
            startCursor
            endCursor
            totalCount
        }
    }
}
"""

HUMANS_QUERY = """
query GetHumans($first: Int, $after: String, $last: Int, $before: String) {
    humans(first: $first, after: $after, last: $last, before: $before) {
        edges {
            cursor
            node {
                id
                name
            }
        }
        pageInfo {
            hasNextPage
            hasPreviousPage
            startCursor
            endCursor
            totalCount
        }
    }
}
"""

CREATE_HUMAN_MUTATION = """
mutation CreateHuman($human: HumanInput!) {
    createHuman(human: $human) {
        id
        name
        homePlanet
        dateOfBirth
        appearsIn
        created
        modified
        friends {
            name
        }
    }
}
"""
