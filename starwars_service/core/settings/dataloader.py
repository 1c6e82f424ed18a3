"""Batch loader settings.

Environment variables use DATALOADER_ prefix.
Example: DATALOADER_MAX_BATCH_SIZE=200
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataLoaderSettings(BaseSettings):
    """Request-scoped batch loader configuration."""

    max_batch_size: int | None = Field(
        default=None,
        ge=1,
        le=10_000,
        description="Close and dispatch a batch once it holds this many keys (None = unbounded)",
    )
    auto_dispatch: bool = Field(
        default=True,
        description="Dispatch each batch at the end of the event-loop turn that opened it",
    )

    model_config = SettingsConfigDict(
        env_prefix="DATALOADER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
