"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from starwars_service.app.exception_handlers import configure_exception_handlers
from starwars_service.app.lifespan import init_state, lifespan
from starwars_service.app.router import setup_routers
from starwars_service.core.settings import get_app_settings, get_graphql_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    init_state(app)

    configure_exception_handlers(app)
    setup_routers(app, get_graphql_settings())

    return app


# Application instance for uvicorn
app = create_app()
