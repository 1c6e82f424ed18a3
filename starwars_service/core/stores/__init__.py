"""Ordered entity stores backing loaders, pagination and mutations."""

from starwars_service.core.stores.base import Entity, OrderedStore, OrderingKey
from starwars_service.core.stores.memory import InMemoryOrderedStore

__all__ = ["Entity", "InMemoryOrderedStore", "OrderedStore", "OrderingKey"]
