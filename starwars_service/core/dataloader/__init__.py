"""Request-scoped batch loading.

DataLoaders batch and cache lookups within a single request, preventing
the N+1 query problem common in GraphQL resolvers.
"""

from starwars_service.core.dataloader.batch import Batch, BatchRequest
from starwars_service.core.dataloader.loader import BatchLoader, FetchMany

__all__ = ["Batch", "BatchLoader", "BatchRequest", "FetchMany"]
