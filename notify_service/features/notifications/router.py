"""API router for the notifications feature.

- POST /notifications/dispatch - dispatch to a recipient (guest fallback by contact)
- POST /notifications/dispatch/guest - dispatch to a bare email/phone pair
- GET /notifications/classify/{event_kind} - inspect event classification
"""

from fastapi import APIRouter, Response, status
from sqlalchemy.exc import SQLAlchemyError

from notify_service.core.exceptions import ServiceUnavailableException
from notify_service.features.notifications.classification import classify_event
from notify_service.features.notifications.dependencies import DispatchServiceDep, SessionDep
from notify_service.features.notifications.schemas import (
    DispatchResult,
    EventClassificationResponse,
    GuestNotificationRequest,
    NotificationRequest,
)
from notify_service.infra.logging import get_lazy_logger, get_logger

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = get_logger(__name__)
_lazy = get_lazy_logger(__name__)


def _database_unavailable(exc: SQLAlchemyError) -> ServiceUnavailableException:
    logger.exception("Database error during dispatch", extra={"error": str(exc)})
    return ServiceUnavailableException(
        detail="Notification store is unavailable",
        type="database-unavailable",
    )


@router.post(
    "/dispatch",
    response_model=DispatchResult,
    summary="Dispatch a notification",
    description="""
Evaluate recipient preferences and practice automation settings, then send
the notification over in-app, email and SMS.

Declined or failed channels are listed in `errors` while `success` stays
true. A request with neither `recipient_id` nor a guest email/phone returns
400 with `success: false`.
""",
    responses={
        400: {"description": "Request has no recipient and no contact"},
        503: {"description": "Notification store unavailable"},
    },
)
async def dispatch_notification(
    payload: NotificationRequest,
    response: Response,
    session: SessionDep,
    service: DispatchServiceDep,
) -> DispatchResult:
    """Dispatch a notification."""
    _lazy.debug(lambda: f"POST /notifications/dispatch event_kind={payload.event_kind}")
    try:
        result = await service.dispatch(session, payload)
    except SQLAlchemyError as exc:
        raise _database_unavailable(exc) from exc
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.post(
    "/dispatch/guest",
    response_model=DispatchResult,
    summary="Dispatch to a guest contact",
    description="Send directly to an email and/or phone; no preference or practice checks.",
    responses={400: {"description": "Neither email nor phone supplied"}},
)
async def dispatch_guest_notification(
    payload: GuestNotificationRequest,
    response: Response,
    session: SessionDep,
    service: DispatchServiceDep,
) -> DispatchResult:
    """Dispatch a notification to a guest contact."""
    try:
        result = await service.dispatch_guest(session, payload)
    except SQLAlchemyError as exc:
        raise _database_unavailable(exc) from exc
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get(
    "/classify/{event_kind}",
    response_model=EventClassificationResponse,
    summary="Classify an event kind",
)
async def classify_event_kind(event_kind: str) -> EventClassificationResponse:
    """Show the preference key and category an event kind maps to."""
    classification = classify_event(event_kind)
    return EventClassificationResponse(
        event_kind=classification.event_kind,
        preference_key=classification.preference_key,
        is_automation=classification.is_automation,
        category=classification.category.value,
    )
