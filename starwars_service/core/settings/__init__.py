"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each read from environment variables
with its own prefix and loaded once through an LRU-cached getter:

    from starwars_service.core.settings import get_graphql_settings

    settings = get_graphql_settings()
    print(settings.max_page_size)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .dataloader import DataLoaderSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_all_settings_caches,
    get_app_settings,
    get_dataloader_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings

__all__ = [
    "AppSettings",
    "DataLoaderSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_all_settings_caches",
    "get_app_settings",
    "get_dataloader_settings",
    "get_graphql_settings",
    "get_logging_settings",
]
