"""FastAPI dependencies for the notifications feature.

Example usage:
    @router.post("/notifications/dispatch")
    async def dispatch(
        payload: NotificationRequest,
        session: SessionDep,
        service: DispatchServiceDep,
    ) -> DispatchResult:
        return await service.dispatch(session, payload)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notify_service.core.dependencies.database import get_db_session
from notify_service.features.notifications.service import (
    NotificationDispatchService,
    get_dispatch_service,
)

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

DispatchServiceDep = Annotated[NotificationDispatchService, Depends(get_dispatch_service)]

__all__ = ["DispatchServiceDep", "SessionDep"]
