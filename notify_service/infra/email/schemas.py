"""Email message model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field


class EmailMessage(BaseModel):
    """Email message ready for sending.

    Example:
        message = EmailMessage(
            to=["pat@example.com"],
            subject="Appointment reminder",
            body_text="See you tomorrow.",
            body_html="<p>See you tomorrow.</p>",
        )
    """

    to: list[EmailStr] = Field(min_length=1, description="Primary recipients")
    subject: str = Field(min_length=1, max_length=998, description="Subject line")
    body_text: str | None = Field(default=None, description="Plain-text body")
    body_html: str | None = Field(default=None, description="HTML body")
    from_email: EmailStr | None = Field(
        default=None, description="Sender address; provider default when omitted"
    )
    from_name: str | None = Field(default=None, description="Sender display name")
    tags: list[str] = Field(default_factory=list, description="Provider tags/categories")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Free-form data for logs and provider tags"
    )
