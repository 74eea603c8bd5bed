"""PII masking for log output.

Phone numbers and credentials pass through the client on every send.
They are masked before being handed to the logger; the request itself
is never altered.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = ["mask_phone", "sanitize_phone", "sanitize_form"]

# International numbers as accepted by the gateway: optional ``+`` and
# 10-25 digits.  We preserve only the last 4 digits.
_PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\+?\d{6,21}(\d{4})\b",
    re.ASCII,
)

_SECRET_FIELDS: Final[frozenset[str]] = frozenset({"pass"})


def mask_phone(number: str | None) -> str:
    """Mask a single phone number, keeping its last 4 characters.

    ``+436641234567`` becomes ``XXXXXX4567``.
    """
    if not number:
        return "<empty>"
    if len(number) <= 4:
        return "XXXX"
    return f"XXXXXX{number[-4:]}"


def sanitize_phone(text: str) -> str:
    """Mask every phone number found in *text*."""

    def _mask(match: re.Match[str]) -> str:
        return f"XXXXXX{match.group(1)}"

    return _PHONE_PATTERN.sub(_mask, text)


def sanitize_form(form: dict[str, str]) -> dict[str, str]:
    """Copy of an outbound form that is safe to log."""
    clean: dict[str, str] = {}
    for name, value in form.items():
        if name in _SECRET_FIELDS:
            clean[name] = "[REDACTED]"
        elif name == "nummer":
            clean[name] = mask_phone(value)
        elif name == "text":
            clean[name] = f"<{len(value)} chars>"
        else:
            clean[name] = value
    return clean
