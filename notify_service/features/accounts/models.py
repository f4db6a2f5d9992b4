"""Account directory models.

These tables are owned by the surrounding application; the notification
engine only reads them:

- Profile: contact data for a recipient (email, names, phone)
- PatientAccount: links a managed party (patient) to the practice that
  owns their automation policy, optionally carrying a phone number
- PracticeAccount: links a practice principal (staff, provider) to a practice
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from notify_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class Profile(Base, TimestampMixin):
    """Recipient profile keyed by the opaque recipient id."""

    __tablename__ = "profiles"

    # Issued by the identity provider, not generated here.
    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Recipient identity (auth user id)",
    )
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    @property
    def display_name(self) -> str | None:
        """Preferred greeting name: full name, else short name."""
        return self.full_name or self.name or None

    def __repr__(self) -> str:
        return f"<Profile(id={self.id!r})>"


class PatientAccount(Base, UUIDv7PKMixin):
    """Managed-party linkage: recipient belongs to a practice as a patient."""

    __tablename__ = "patient_accounts"

    user_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Recipient identity of the patient",
    )
    practice_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Owning practice (organization)",
    )
    phone: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="Phone captured at intake; fallback when the profile has none",
    )


class PracticeAccount(Base, UUIDv7PKMixin):
    """Principal linkage: recipient is a member of a practice."""

    __tablename__ = "practice_accounts"

    user_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Recipient identity of the practice member",
    )
    practice_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment="Practice (organization) the member belongs to",
    )
