"""
Masking of personal contact fields in the public customer list.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-012)
"""

import re

_PHONE_MIDDLE = re.compile(r"(\d{3})\d{4}(\d{4})")


def mask_name(name: str | None) -> str:
    """Keep the first character of a contact name: ``张三`` -> ``张**``."""
    if not name:
        return ""
    return name[0] + "**"


def mask_phone(phone: str | None) -> str:
    """Hide the middle four digits of the first 11-digit run.

    ``13800138000`` -> ``138****8000``. Shorter numbers are returned as-is.
    """
    if not phone:
        return ""
    return _PHONE_MIDDLE.sub(r"\1****\2", phone, count=1)
