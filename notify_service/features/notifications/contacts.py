"""Contact resolution.

Loads the recipient's profile (email, display name, phone) and the owning
organization. Organization linkage is resolved by an ordered list of
strategies; the first strategy that finds a linkage row wins.

Read failures degrade to "no contact info" rather than failing dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from sqlalchemy.exc import SQLAlchemyError

from notify_service.core.services.base import BaseService
from notify_service.features.accounts.repository import (
    PatientAccountRepository,
    PracticeAccountRepository,
    ProfileRepository,
    get_patient_account_repository,
    get_practice_account_repository,
    get_profile_repository,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True, slots=True)
class OrganizationLink:
    """A linkage row tying the recipient to an organization."""

    organization_id: str | None
    phone: str | None = None
    source: str = ""


@dataclass(frozen=True, slots=True)
class ContactInfo:
    """Resolved contact data for one recipient."""

    email: str | None = None
    display_name: str | None = None
    phone: str | None = None
    organization_id: str | None = None

    @property
    def has_email(self) -> bool:
        return bool(self.email)

    @property
    def has_phone(self) -> bool:
        return bool(self.phone)


NO_CONTACT = ContactInfo()


class OrganizationResolver(Protocol):
    """Strategy that looks up one kind of organization linkage."""

    name: str

    async def resolve(self, session: AsyncSession, recipient_id: str) -> OrganizationLink | None:
        """Return the linkage for the recipient, or None if this strategy has none."""
        ...


class DependentAccountResolver:
    """Recipient is a managed party (patient) of a practice."""

    name = "patient_account"

    def __init__(self, repository: PatientAccountRepository | None = None) -> None:
        self._repository = repository or get_patient_account_repository()

    async def resolve(self, session: AsyncSession, recipient_id: str) -> OrganizationLink | None:
        account = await self._repository.get_for_user(session, recipient_id)
        if account is None:
            return None
        return OrganizationLink(
            organization_id=account.practice_id,
            phone=account.phone,
            source=self.name,
        )


class PrincipalAccountResolver:
    """Recipient is a member (staff, provider) of a practice."""

    name = "practice_account"

    def __init__(self, repository: PracticeAccountRepository | None = None) -> None:
        self._repository = repository or get_practice_account_repository()

    async def resolve(self, session: AsyncSession, recipient_id: str) -> OrganizationLink | None:
        account = await self._repository.get_for_user(session, recipient_id)
        if account is None:
            return None
        return OrganizationLink(organization_id=account.practice_id, source=self.name)


def default_organization_resolvers() -> list[OrganizationResolver]:
    """Strategies in lookup order: managed party first, then principal."""
    return [DependentAccountResolver(), PrincipalAccountResolver()]


class ContactResolver(BaseService):
    """Resolves a recipient id to contact data and owning organization."""

    def __init__(
        self,
        profile_repository: ProfileRepository | None = None,
        organization_resolvers: Sequence[OrganizationResolver] | None = None,
    ) -> None:
        super().__init__()
        self._profiles = profile_repository or get_profile_repository()
        self._resolvers = (
            list(organization_resolvers)
            if organization_resolvers is not None
            else default_organization_resolvers()
        )

    async def resolve(self, session: AsyncSession, recipient_id: str) -> ContactInfo:
        """Resolve contact data.

        The profile phone wins; a linkage row's phone is used only when the
        profile has none. A missing profile yields empty contact fields.
        """
        email = display_name = phone = None
        try:
            profile = await self._profiles.get(session, recipient_id)
        except SQLAlchemyError as exc:
            await session.rollback()
            self.logger.warning(
                "Profile lookup failed, continuing without contact info",
                extra={"recipient_id": recipient_id, "error": str(exc)},
            )
            profile = None

        if profile is None:
            self.logger.info("No profile found for recipient", extra={"recipient_id": recipient_id})
        else:
            email = (profile.email or "").strip() or None
            display_name = profile.display_name
            phone = (profile.phone or "").strip() or None

        link = await self._resolve_organization(session, recipient_id)
        link_phone = (link.phone or "").strip() if link is not None else ""
        if not phone and link_phone:
            phone = link_phone
            self._lazy.debug(lambda: f"Using phone from {link.source} for {recipient_id}")

        return ContactInfo(
            email=email,
            display_name=display_name,
            phone=phone,
            organization_id=link.organization_id if link else None,
        )

    async def _resolve_organization(
        self, session: AsyncSession, recipient_id: str
    ) -> OrganizationLink | None:
        for resolver in self._resolvers:
            try:
                link = await resolver.resolve(session, recipient_id)
            except SQLAlchemyError as exc:
                await session.rollback()
                self.logger.warning(
                    "Organization lookup failed",
                    extra={
                        "recipient_id": recipient_id,
                        "resolver": resolver.name,
                        "error": str(exc),
                    },
                )
                continue
            if link is not None:
                self._lazy.debug(
                    lambda link=link, resolver=resolver: (
                        f"Organization for {recipient_id} via {resolver.name}: {link.organization_id}"
                    )
                )
                return link
        return None
