"""Phone number normalization to E.164."""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(phone: str, country_code: str = "1") -> str:
    """Normalize a phone number to E.164.

    - Values already starting with ``+`` pass through unchanged.
    - A bare 10-digit number is domestic: ``+<country_code><digits>``.
    - 11 digits starting with the country code get a ``+`` prefix.
    - Anything else is prefixed with ``+`` as a last resort.

    Examples:
        >>> normalize_phone("5551234567")
        '+15551234567'
        >>> normalize_phone("(555) 123-4567")
        '+15551234567'
        >>> normalize_phone("+445551234567")
        '+445551234567'
    """
    phone = phone.strip()
    if phone.startswith("+"):
        return phone

    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10:
        return f"+{country_code}{digits}"
    # 11 digits with a leading country code, or anything else: only the "+" is missing.
    return f"+{digits}"
