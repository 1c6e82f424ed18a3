"""Application lifespan management.

Startup:
1. Logging from ``LoggingSettings``
2. Seeded character stores and the system clock on ``app.state``
   (unless already set, e.g. by tests)

Shutdown flushes and stops the log queue listener.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from starwars_service.core.clock import SystemClock
from starwars_service.core.settings import (
    get_app_settings,
    get_graphql_settings,
    get_logging_settings,
)
from starwars_service.features.characters import create_character_repository
from starwars_service.infra.logging import setup_logging
from starwars_service.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def init_state(app: FastAPI) -> None:
    """Attach application-wide collaborators to ``app.state``."""
    if getattr(app.state, "repository", None) is None:
        app.state.repository = create_character_repository(
            max_page_size=get_graphql_settings().max_page_size,
        )
    if getattr(app.state, "clock", None) is None:
        app.state.clock = SystemClock()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    init_state(app)
    logger.info(
        "Application starting",
        extra={
            "service": settings.service_name,
            "version": settings.version,
            "environment": settings.environment,
        },
    )
    try:
        yield
    finally:
        logger.info("Application shutting down", extra={"service": settings.service_name})
        shutdown_logging()


__all__ = ["init_state", "lifespan"]
