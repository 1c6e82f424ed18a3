"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client
    - Store Fixtures: seeded character stores and repository
    - Clock Fixtures: a frozen clock for deterministic timestamps
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from starwars_service.core.clock import FrozenClock
from starwars_service.core.settings import clear_all_settings_caches
from starwars_service.features.characters import CharacterRepository, create_character_repository

# Keep test runs quiet and deterministic
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

FROZEN_NOW = datetime(2025, 5, 4, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    """Settings are cached per process; tests that patch env see fresh values."""
    clear_all_settings_caches()
    yield
    clear_all_settings_caches()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def repository() -> CharacterRepository:
    """Repository over freshly seeded in-memory stores."""
    return create_character_repository(max_page_size=100)


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(FROZEN_NOW)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(repository: CharacterRepository, frozen_clock: FrozenClock):
    """FastAPI application wired to the test repository and clock."""
    from starwars_service.app.main import create_app

    application = create_app()
    application.state.repository = repository
    application.state.clock = frozen_clock
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the application.

    Example:
        async def test_graphql(client):
            response = await client.post("/graphql", json={"query": "{ droids { edges { cursor } } }"})
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
