"""SMS message model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SmsMessage(BaseModel):
    """Text message ready for sending.

    ``to`` must already be normalized to E.164.
    """

    to: str = Field(pattern=r"^\+\d{4,15}$", description="Destination in E.164 format")
    body: str = Field(min_length=1, max_length=1600, description="Message text")
