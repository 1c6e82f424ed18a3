"""Metrics infrastructure for Prometheus monitoring."""

from __future__ import annotations

from prometheus_client import generate_latest

from starwars_service.infra.metrics.prometheus import (
    REGISTRY,
    dataloader_batch_duration_seconds,
    dataloader_batch_size,
    dataloader_batches_total,
    dataloader_cache_hits_total,
)

__all__ = [
    "REGISTRY",
    "dataloader_batch_duration_seconds",
    "dataloader_batch_size",
    "dataloader_batches_total",
    "dataloader_cache_hits_total",
    "generate_latest",
]
