"""Dispatch orchestration.

classify -> load preferences -> (full opt-out short-circuit)
    -> resolve contact and organization -> evaluate policy
    -> in-app write -> email and SMS (concurrently) -> delivery log -> result

Database work stays on the caller's session and is never concurrent: the
in-app row is written and committed first, the provider calls for email
and SMS then run concurrently without touching the session, and each
channel's log row is written once that channel has resolved.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from uuid import UUID

from notify_service.core.services.base import BaseService
from notify_service.core.settings import get_dispatch_settings
from notify_service.features.notifications.channels import (
    ChannelOutcome,
    EmailChannelDispatcher,
    InAppChannelDispatcher,
    SmsChannelDispatcher,
)
from notify_service.features.notifications.classification import classify_event
from notify_service.features.notifications.contacts import ContactResolver
from notify_service.features.notifications.delivery_log import DeliveryLogger
from notify_service.features.notifications.enums import CHANNEL_ORDER, Channel
from notify_service.features.notifications.metrics import (
    notification_dispatch_total,
    notification_policy_declined_total,
)
from notify_service.features.notifications.policy import all_user_disabled, evaluate_policy
from notify_service.features.notifications.preferences import PreferenceStore
from notify_service.features.notifications.schemas import (
    DispatchResult,
    GuestNotificationRequest,
    NotificationRequest,
)
from notify_service.infra.logging import remove_from_log_context, set_log_context
from notify_service.infra.sms import mask_phone

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from sqlalchemy.ext.asyncio import AsyncSession

    from notify_service.core.settings import DispatchSettings
    from notify_service.features.notifications.classification import EventClassification
    from notify_service.features.notifications.contacts import ContactInfo
    from notify_service.features.notifications.policy import PolicyDecision
    from notify_service.features.notifications.preferences import (
        ChannelPreferences,
        OrganizationAutomationSettings,
    )
    from notify_service.infra.email import EmailProvider
    from notify_service.infra.sms import SmsProvider

MISSING_RECIPIENT_ERROR = "recipient_id or a guest email/phone is required"
MISSING_GUEST_CONTACT_ERROR = "email or phone is required"
ALL_CHANNELS_DISABLED = "All channels disabled"


def _mask_id(recipient_id: str | None) -> str | None:
    if not recipient_id:
        return None
    return f"{recipient_id[:8]}***"


def _outcome_error(outcome: ChannelOutcome) -> str | None:
    return None if outcome.sent else outcome.error


class NotificationDispatchService(BaseService):
    """Entry point for sending one notification over in-app, email and SMS.

    Example:
        service = NotificationDispatchService()
        result = await service.dispatch(session, NotificationRequest(
            recipient_id="user-1",
            event_kind="appointment_reminder",
            title="Reminder",
            body="See you tomorrow at 10:00",
        ))
    """

    def __init__(
        self,
        settings: DispatchSettings | None = None,
        *,
        email_provider: EmailProvider | None = None,
        sms_provider: SmsProvider | None = None,
        contact_resolver: ContactResolver | None = None,
        preference_store: PreferenceStore | None = None,
        delivery_logger: DeliveryLogger | None = None,
        in_app: InAppChannelDispatcher | None = None,
        email: EmailChannelDispatcher | None = None,
        sms: SmsChannelDispatcher | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or get_dispatch_settings()
        self._contacts = contact_resolver or ContactResolver()
        self._preferences = preference_store or PreferenceStore()
        self._delivery_log = delivery_logger or DeliveryLogger()
        self._in_app = in_app or InAppChannelDispatcher(severity=self._settings.default_severity)
        self._email = email or EmailChannelDispatcher(self._settings, provider=email_provider)
        self._sms = sms or SmsChannelDispatcher(self._settings, provider=sms_provider)

    @property
    def settings(self) -> DispatchSettings:
        return self._settings

    async def dispatch(self, session: AsyncSession, request: NotificationRequest) -> DispatchResult:
        """Dispatch a notification to a durable recipient.

        Requests without ``recipient_id`` but with an email or phone go
        through the guest path. Without either, the request is rejected
        with ``success=False``; nothing is sent or logged.
        """
        if not request.recipient_id:
            if request.has_guest_contact:
                return await self.dispatch_guest(
                    session,
                    GuestNotificationRequest(
                        email=request.email,
                        phone=request.phone,
                        title=request.title,
                        body=request.body,
                        metadata=request.metadata,
                    ),
                )
            self.logger.warning(
                "Rejected notification without recipient",
                extra={"event_kind": request.event_kind},
            )
            return DispatchResult(success=False, errors=[MISSING_RECIPIENT_ERROR])

        classification = classify_event(request.event_kind)
        set_log_context(
            event_kind=request.event_kind,
            recipient=_mask_id(request.recipient_id),
        )
        try:
            notification_dispatch_total.labels(category=classification.category.value).inc()
            self._lazy.debug(
                lambda: f"Type mapping: {request.event_kind} -> {classification.preference_key} "
                f"({classification.category.value})"
            )
            return await self._dispatch_to_recipient(session, request, classification)
        finally:
            remove_from_log_context("event_kind", "recipient")

    async def _dispatch_to_recipient(
        self,
        session: AsyncSession,
        request: NotificationRequest,
        classification: EventClassification,
    ) -> DispatchResult:
        recipient_id = request.recipient_id
        preferences = await self._preferences.get_channel_preferences(
            session, recipient_id, classification.preference_key
        )

        if preferences.all_disabled:
            self.logger.info("All channels disabled by recipient, skipping notification")
            policy = all_user_disabled()
            self._count_declines(policy)
            errors = []
            for channel in CHANNEL_ORDER:
                decision = policy[channel]
                errors.append(decision.message)
                await self._delivery_log.record(
                    session,
                    ChannelOutcome.skipped_outcome(channel, decision.message),
                    recipient_id=recipient_id,
                )
            return DispatchResult(
                success=True,
                channels_sent=[],
                errors=errors,
                message=ALL_CHANNELS_DISABLED,
            )

        contact = await self._contacts.resolve(session, recipient_id)
        organization = await self._preferences.get_automation_settings(
            session, contact.organization_id
        )
        policy = evaluate_policy(classification, preferences, contact, organization)
        self._count_declines(policy)
        self._log_decisions(preferences, organization, contact, policy)

        outcomes: dict[Channel, ChannelOutcome] = {}
        notification_id: UUID | None = None

        if policy.allows(Channel.IN_APP):
            outcomes[Channel.IN_APP] = await self._in_app.send(
                session,
                recipient_id=recipient_id,
                event_kind=request.event_kind,
                title=request.title,
                body=request.body,
                metadata=request.metadata,
                action_url=request.action_url,
                entity_type=request.entity_type,
                entity_id=request.entity_id,
            )
            if outcomes[Channel.IN_APP].sent and outcomes[Channel.IN_APP].external_id:
                notification_id = UUID(outcomes[Channel.IN_APP].external_id)
        else:
            outcomes[Channel.IN_APP] = ChannelOutcome.skipped_outcome(
                Channel.IN_APP, policy[Channel.IN_APP].message
            )
        await self._delivery_log.record(
            session,
            outcomes[Channel.IN_APP],
            recipient_id=recipient_id,
            notification_id=notification_id,
        )

        action_url = request.override_action_url or request.action_url or self._settings.portal_url
        external: dict[Channel, Awaitable[ChannelOutcome]] = {}
        if policy.allows(Channel.EMAIL):
            external[Channel.EMAIL] = self._email.send(
                to=contact.email,
                recipient_name=contact.display_name or self._settings.fallback_recipient_name,
                title=request.title,
                body=request.body,
                action_url=action_url,
            )
        if policy.allows(Channel.SMS):
            external[Channel.SMS] = self._sms.send(
                phone=contact.phone,
                title=request.title,
                body=request.body,
                join_link=request.join_link,
            )
        outcomes.update(await self._run_external(external))

        for channel in (Channel.EMAIL, Channel.SMS):
            if channel not in outcomes:
                outcomes[channel] = ChannelOutcome.skipped_outcome(channel, policy[channel].message)
            await self._delivery_log.record(
                session,
                outcomes[channel],
                recipient_id=recipient_id,
                notification_id=notification_id,
            )

        result = self._aggregate(outcomes, notification_id=notification_id)
        self.logger.info(
            "Notification dispatched",
            extra={"channels_sent": result.channels_sent, "error_count": len(result.errors)},
        )
        return result

    async def dispatch_guest(
        self,
        session: AsyncSession,
        request: GuestNotificationRequest,
    ) -> DispatchResult:
        """Send directly to an email/phone pair.

        No classification, preference or organization lookups happen and no
        in-app row is written. Outcomes are logged without a recipient id.
        """
        if not request.has_contact:
            self.logger.warning("Rejected guest notification without contact")
            return DispatchResult(success=False, errors=[MISSING_GUEST_CONTACT_ERROR])

        notification_dispatch_total.labels(category="guest").inc()
        set_log_context(guest=True)
        try:
            action_url = request.override_action_url or self._settings.portal_url
            external: dict[Channel, Awaitable[ChannelOutcome]] = {}
            if request.email:
                external[Channel.EMAIL] = self._email.send(
                    to=request.email,
                    recipient_name=self._settings.fallback_recipient_name,
                    title=request.title,
                    body=request.body,
                    action_url=action_url,
                )
            if request.phone:
                external[Channel.SMS] = self._sms.send(
                    phone=request.phone,
                    title=request.title,
                    body=request.body,
                    join_link=request.join_link,
                )
            self._lazy.debug(
                lambda: f"Guest delivery to email={bool(request.email)} "
                f"phone={mask_phone(request.phone) or None}"
            )
            outcomes = await self._run_external(external)
            for channel in (Channel.EMAIL, Channel.SMS):
                if channel in outcomes:
                    await self._delivery_log.record(session, outcomes[channel], recipient_id=None)
            return self._aggregate(outcomes)
        finally:
            remove_from_log_context("guest")

    async def _run_external(
        self, calls: dict[Channel, Awaitable[ChannelOutcome]]
    ) -> dict[Channel, ChannelOutcome]:
        """Await provider-bound channel sends concurrently.

        Dispatchers never raise; a stray exception still becomes a failed
        outcome so one channel can never take down its sibling.
        """
        if not calls:
            return {}
        channels = list(calls)
        results = await asyncio.gather(*calls.values(), return_exceptions=True)
        outcomes: dict[Channel, ChannelOutcome] = {}
        for channel, result in zip(channels, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self.logger.error(
                    "Channel dispatcher raised",
                    extra={"channel": channel.value, "error": str(result)},
                )
                outcomes[channel] = ChannelOutcome.failed_outcome(
                    channel, f"{channel.label} failed: {result}"
                )
            else:
                outcomes[channel] = result
        return outcomes

    @staticmethod
    def _aggregate(
        outcomes: dict[Channel, ChannelOutcome],
        *,
        notification_id: UUID | None = None,
    ) -> DispatchResult:
        channels_sent: list[str] = []
        errors: list[str] = []
        for channel in CHANNEL_ORDER:
            outcome = outcomes.get(channel)
            if outcome is None:
                continue
            if outcome.sent:
                channels_sent.append(channel.value)
            elif (error := _outcome_error(outcome)) is not None:
                errors.append(error)
        return DispatchResult(
            success=True,
            channels_sent=channels_sent,
            errors=errors,
            notification_id=notification_id,
        )

    @staticmethod
    def _count_declines(policy: PolicyDecision) -> None:
        for decision in policy.declined:
            notification_policy_declined_total.labels(
                channel=decision.channel.value, reason=decision.reason.value
            ).inc()

    def _log_decisions(
        self,
        preferences: ChannelPreferences,
        organization: OrganizationAutomationSettings,
        contact: ContactInfo,
        policy: PolicyDecision,
    ) -> None:
        self._lazy.debug(
            lambda: "Channel decisions: "
            f"user={{email: {preferences.email_enabled}, sms: {preferences.sms_enabled}, "
            f"in_app: {preferences.in_app_enabled}}} "
            f"organization={{email: {organization.email_enabled}, sms: {organization.sms_enabled}}} "
            f"contact={{email: {contact.has_email}, phone: {mask_phone(contact.phone) or None}}} "
            f"decisions={{{', '.join(f'{c.value}: {policy.allows(c)}' for c in CHANNEL_ORDER)}}}"
        )


_dispatch_service: NotificationDispatchService | None = None


def get_dispatch_service() -> NotificationDispatchService:
    """Get NotificationDispatchService singleton instance."""
    global _dispatch_service
    if _dispatch_service is None:
        _dispatch_service = NotificationDispatchService()
    return _dispatch_service
