"""Prometheus metrics for request-scoped data loading."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Private registry so tests and multiple app instances never collide
# with the process-wide default registry
REGISTRY = CollectorRegistry()

# Keys per dispatched batch
BATCH_SIZE_BUCKETS = (1, 2, 5, 10, 25, 50, 100, 250, 500, 1000)

dataloader_batches_total = Counter(
    "dataloader_batches_total",
    "Total batch dispatches by loader and outcome",
    ["loader", "outcome"],
    registry=REGISTRY,
)

dataloader_batch_size = Histogram(
    "dataloader_batch_size",
    "Number of distinct keys per dispatched batch",
    ["loader"],
    buckets=BATCH_SIZE_BUCKETS,
    registry=REGISTRY,
)

dataloader_cache_hits_total = Counter(
    "dataloader_cache_hits_total",
    "Loads answered from the request-scoped cache without a new batch entry",
    ["loader"],
    registry=REGISTRY,
)

dataloader_batch_duration_seconds = Histogram(
    "dataloader_batch_duration_seconds",
    "Time spent in the bulk fetch of one batch",
    ["loader"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=REGISTRY,
)
