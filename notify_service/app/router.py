"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter

from notify_service.features.notifications.router import router as notifications_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from notify_service.core.settings import AppSettings

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["health"])


@health_router.get("/health", summary="Liveness probe")
async def health() -> dict[str, str]:
    """Report that the process is up."""
    return {"status": "ok"}


def setup_routers(app: FastAPI, app_settings: AppSettings) -> None:
    """Register all feature routers with the application."""
    api_prefix = app_settings.api_prefix
    app.include_router(notifications_router, prefix=api_prefix)
    app.include_router(health_router)
    logger.info("Routers registered", extra={"api_prefix": api_prefix})
