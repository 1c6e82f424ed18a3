"""Base class for service-layer objects."""

from __future__ import annotations

import logging

from starwars_service.infra.logging import get_lazy_logger


class BaseService:
    """Gives every service a named logger pair.

    Loggers:
        - self.logger: INFO/WARNING/ERROR, always evaluated
        - self._lazy: DEBUG messages built only when DEBUG is enabled

    Example:
        class DroidCatalogue(BaseService):
            async def rename(self, droid: Droid) -> Droid:
                self.logger.info("Renaming droid", extra={"droid_id": str(droid.id)})
                self._lazy.debug(lambda: f"Droid state: {droid.model_dump()}")
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
