"""Core services module.

Mutation gateway:
    from starwars_service.core.services import MutationGateway

    gateway = MutationGateway(store, clock, model_cls=Human)
    human = await gateway.create(payload)
"""

from starwars_service.core.services.base import BaseService
from starwars_service.core.services.mutations import MutationGateway

__all__ = ["BaseService", "MutationGateway"]
