"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request and provides:
- Character repository (shared stores behind the loaders and connections)
- DataLoaders (request-scoped batching and caching)
- Clock (timestamps for mutations)
- Correlation ID (for log correlation)

Following Strawberry's FastAPI integration pattern:
https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

from starwars_service.core.clock import Clock, SystemClock

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from starwars_service.core.settings import GraphQLSettings
    from starwars_service.features.characters import CharacterRepository
    from starwars_service.features.graphql.dataloaders import DataLoaders


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Standard fields (per Strawberry docs):
    - request: The HTTP request (or None outside HTTP, e.g. in tests)
    - response: The HTTP response
    - background_tasks: FastAPI BackgroundTasks

    Custom fields:
    - repository: Character stores
    - loaders: DataLoaders bound to this request
    - settings: GraphQL settings (page sizes)
    - clock: Source of mutation timestamps
    - correlation_id: Request identifier copied into every log record

    Example usage in resolver:
        @strawberry.field
        async def droid(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> DroidType | None:
            droid = await info.context.loaders.droids.load(UUID(id))
            return DroidType.from_model(droid) if droid else None
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    repository: CharacterRepository = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    settings: GraphQLSettings | None = None
    clock: Clock = field(default_factory=SystemClock)
    correlation_id: str | None = None


__all__ = ["GraphQLContext"]
