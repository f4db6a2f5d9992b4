"""Application lifespan: logging, database startup and shutdown."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from notify_service.core.settings import get_app_settings
from notify_service.infra.database import close_database, init_database
from notify_service.infra.logging import complete, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop shared resources."""
    setup_logging()
    app_settings = get_app_settings()
    logger.info(
        "Starting application",
        extra={"service": app_settings.service_name, "version": app_settings.version},
    )

    await init_database()
    try:
        yield
    finally:
        logger.info("Shutting down application", extra={"service": app_settings.service_name})
        await close_database()
        complete()
