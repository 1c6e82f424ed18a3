"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from starwars_service.core.settings import get_graphql_settings

    settings = get_graphql_settings()

Testing:
    In tests, clear the cache to force reload:
    get_graphql_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .dataloader import DataLoaderSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL settings.

    Returns:
        Validated and frozen GraphQLSettings instance.
    """
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_dataloader_settings() -> DataLoaderSettings:
    """Get cached batch loader settings.

    Returns:
        Validated and frozen DataLoaderSettings instance.
    """
    return DataLoaderSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_settings_caches() -> None:
    """Clear every cached settings instance (used by tests)."""
    get_app_settings.cache_clear()
    get_graphql_settings.cache_clear()
    get_dataloader_settings.cache_clear()
    get_logging_settings.cache_clear()
