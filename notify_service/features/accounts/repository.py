"""Repositories for the account directory (read-only)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from notify_service.core.database.repository import BaseRepository
from notify_service.features.accounts.models import PatientAccount, PracticeAccount, Profile

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class ProfileRepository(BaseRepository[Profile]):
    """Repository for recipient profiles."""

    def __init__(self) -> None:
        super().__init__(Profile)


class PatientAccountRepository(BaseRepository[PatientAccount]):
    """Repository for patient (managed party) linkage rows."""

    def __init__(self) -> None:
        super().__init__(PatientAccount)

    async def get_for_user(self, session: AsyncSession, user_id: str) -> PatientAccount | None:
        return await self.get_by(session, PatientAccount.user_id, user_id)


class PracticeAccountRepository(BaseRepository[PracticeAccount]):
    """Repository for practice member linkage rows."""

    def __init__(self) -> None:
        super().__init__(PracticeAccount)

    async def get_for_user(self, session: AsyncSession, user_id: str) -> PracticeAccount | None:
        return await self.get_by(session, PracticeAccount.user_id, user_id)


_profile_repository: ProfileRepository | None = None
_patient_account_repository: PatientAccountRepository | None = None
_practice_account_repository: PracticeAccountRepository | None = None


def get_profile_repository() -> ProfileRepository:
    """Get ProfileRepository singleton instance."""
    global _profile_repository
    if _profile_repository is None:
        _profile_repository = ProfileRepository()
    return _profile_repository


def get_patient_account_repository() -> PatientAccountRepository:
    """Get PatientAccountRepository singleton instance."""
    global _patient_account_repository
    if _patient_account_repository is None:
        _patient_account_repository = PatientAccountRepository()
    return _patient_account_repository


def get_practice_account_repository() -> PracticeAccountRepository:
    """Get PracticeAccountRepository singleton instance."""
    global _practice_account_repository
    if _practice_account_repository is None:
        _practice_account_repository = PracticeAccountRepository()
    return _practice_account_repository
