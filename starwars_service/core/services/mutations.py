"""Write path for client-created entities.

The gateway owns the server-assigned fields of a new entity: the store
assigns the identifier, the gateway stamps ``created`` and ``modified``
from one reading of the injected clock.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from starwars_service.core.exceptions import InvalidArgumentException
from starwars_service.core.services.base import BaseService

if TYPE_CHECKING:
    from starwars_service.core.clock import Clock
    from starwars_service.core.stores import OrderedStore

M = TypeVar("M", bound=BaseModel)


class MutationGateway(BaseService, Generic[M]):
    """Create entities from client input.

    Args:
        store: Store that persists the new entities
        clock: Source of the creation instant
        model_cls: Entity model built from ``input.model_dump()`` plus the stamps

    Example:
        gateway = MutationGateway(human_store, SystemClock(), model_cls=Human)
        human = await gateway.create(HumanInput(name="Leia Organa"))
        human.created == human.modified  # True
    """

    def __init__(
        self,
        store: OrderedStore[Any, M],
        clock: Clock,
        *,
        model_cls: type[M],
    ) -> None:
        super().__init__()
        self.store = store
        self.clock = clock
        self.model_cls = model_cls

    async def create(self, entity_input: BaseModel | None) -> M:
        """Stamp and insert a new entity.

        Raises:
            InvalidArgumentException: If the input is missing or does not
                form a valid entity
            asyncio.CancelledError: If the caller is cancelled mid-insert;
                nothing is persisted in that case
        """
        if entity_input is None:
            raise InvalidArgumentException(
                detail=f"Input for a new {self.model_cls.__name__} is required",
                type="missing-input",
                extra={"store": self.store.name},
            )

        now = self.clock.now()
        try:
            entity = self.model_cls(**entity_input.model_dump(), created=now, modified=now)
        except ValidationError as exc:
            raise InvalidArgumentException(
                detail=f"Invalid {self.model_cls.__name__} input",
                extra={"errors": exc.errors(include_url=False)},
            ) from exc

        try:
            created = await self.store.insert(entity)
        except asyncio.CancelledError:
            self.logger.info(
                "Create cancelled before it was persisted",
                extra={"store": self.store.name, "operation": "gateway.create"},
            )
            raise

        self.logger.info(
            "Entity created",
            extra={
                "store": self.store.name,
                "entity_id": str(created.id),
                "operation": "gateway.create",
            },
        )
        return created


__all__ = ["MutationGateway"]
