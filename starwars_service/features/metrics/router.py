"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    - dataloader_batches_total - Dispatched batches by loader and outcome
    - dataloader_batch_size - Keys per dispatched batch
    - dataloader_cache_hits_total - Loads answered from the request cache
    - dataloader_batch_duration_seconds - Time spent in one bulk fetch
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST

from starwars_service.infra.metrics import REGISTRY, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


__all__ = ["router"]
