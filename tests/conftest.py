"""Pytest configuration and shared fixtures.

Organization:
    - Environment: settings that keep tests off external infrastructure
    - Database Fixtures: in-memory SQLite engine and session
    - Provider Fixtures: recording email/SMS providers
    - Service Fixtures: dispatch settings and a wired dispatch service
    - Application Fixtures: FastAPI app and HTTP client
    - Data Fixtures: helpers that seed profiles, accounts and preferences
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from tests.utils import RecordingEmailProvider, RecordingSmsProvider

# Ensure tests run without external infrastructure
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("EMAIL_ENABLED", "false")
os.environ.setdefault("SMS_ENABLED", "false")
os.environ.setdefault("LOG_JSON_LOGS", "false")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite and all tables.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    from notify_service.core.database import Base
    from notify_service.infra.database import import_models

    import_models()
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Async database session for one test.

    Example:
        async def test_profile(db_session):
            db_session.add(Profile(id="usr-1", email="a@example.com"))
            await db_session.commit()
    """
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    from tests.utils import RecordingEmailProvider

    return RecordingEmailProvider()


@pytest.fixture
def sms_provider() -> RecordingSmsProvider:
    from tests.utils import RecordingSmsProvider

    return RecordingSmsProvider()


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def dispatch_settings():
    """Dispatch settings with a short SMS bound so timeout tests stay fast."""
    from notify_service.core.settings import DispatchSettings

    return DispatchSettings(
        portal_url="https://portal.example.com",
        brand_name="Acme Health",
        default_country_code="1",
        sms_timeout_seconds=0.2,
        fallback_recipient_name="Valued User",
    )


@pytest.fixture
def dispatch_service(dispatch_settings, email_provider, sms_provider):
    """NotificationDispatchService wired to the recording providers."""
    from notify_service.features.notifications import NotificationDispatchService

    return NotificationDispatchService(
        dispatch_settings,
        email_provider=email_provider,
        sms_provider=sms_provider,
    )


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory, dispatch_service):
    """FastAPI application using the test database and dispatch service."""
    from notify_service.app.main import create_app
    from notify_service.core.dependencies import get_db_session
    from notify_service.features.notifications import get_dispatch_service

    application = create_app()

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _session_override
    application.dependency_overrides[get_dispatch_service] = lambda: dispatch_service
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the app (lifespan is not run)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def seed(db_session: AsyncSession):
    """Helpers to create directory and preference rows.

    Example:
        await seed.profile("usr-1", email="a@example.com", phone="5551234567")
        await seed.patient("usr-1", practice_id="prac-1")
        await seed.preferences("usr-1", "appointment_reminders", sms_enabled=False)
    """
    from notify_service.features.accounts.models import (
        PatientAccount,
        PracticeAccount,
        Profile,
    )
    from notify_service.features.notifications.models import (
        NotificationPreference,
        PracticeAutomationSettings,
    )

    class Seeder:
        async def _add(self, instance: Any) -> Any:
            db_session.add(instance)
            await db_session.commit()
            return instance

        async def profile(self, recipient_id: str, **fields: Any) -> Profile:
            return await self._add(Profile(id=recipient_id, **fields))

        async def patient(
            self, recipient_id: str, *, practice_id: str | None, phone: str | None = None
        ) -> PatientAccount:
            return await self._add(
                PatientAccount(user_id=recipient_id, practice_id=practice_id, phone=phone)
            )

        async def practice_member(self, recipient_id: str, *, practice_id: str) -> PracticeAccount:
            return await self._add(PracticeAccount(user_id=recipient_id, practice_id=practice_id))

        async def preferences(
            self, recipient_id: str, preference_key: str, **toggles: bool
        ) -> NotificationPreference:
            return await self._add(
                NotificationPreference(
                    recipient_id=recipient_id,
                    preference_key=preference_key,
                    email_enabled=toggles.get("email_enabled", True),
                    sms_enabled=toggles.get("sms_enabled", True),
                    in_app_enabled=toggles.get("in_app_enabled", True),
                )
            )

        async def automation(
            self, practice_id: str, *, email_enabled: bool = True, sms_enabled: bool = True
        ) -> PracticeAutomationSettings:
            return await self._add(
                PracticeAutomationSettings(
                    organization_id=practice_id,
                    email_enabled=email_enabled,
                    sms_enabled=sms_enabled,
                )
            )

    return Seeder()
