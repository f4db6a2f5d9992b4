"""Base service class for business logic."""

from __future__ import annotations

import logging

from notify_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class ContactService(BaseService):
            async def resolve(self, recipient_id: str) -> Contact:
                self.logger.info("Resolving contact", extra={"recipient": recipient_id})
                self._lazy.debug(lambda: f"State: {expensive_dump()}")
    """

    def __init__(self) -> None:
        """Initialize base service with loggers."""
        logger_name = f"{self.__class__.__module__}.{self.__class__.__name__}"
        self.logger = logging.getLogger(logger_name)
        self._lazy = get_lazy_logger(logger_name)
