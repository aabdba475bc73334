"""
Registration form handling and the local-only customer fallback.

Builds the row sent to the hosted database from the submitted form, and --
when that insert fails -- builds a session-local Customer from the same row
so the store and the derived city statistics reflect the registration
immediately.

CHANGELOG:
- 2026-10-14: Accept numeric capacity values as well as form text
- 2026-10-13: Initial creation (STORY-006)

TODO:
- None
"""

from __future__ import annotations

import math
import re
import uuid
from collections.abc import Callable

from dashboard.src.models import (
    OTHER_DEMAND_TYPE,
    Customer,
    InsertPayload,
    RegistrationForm,
)

SESSION_ONLY_NOTICE = "注意：由于数据库连接未配置或失败，数据仅在当前会话保存。"
"""Shown once to the user when a registration is kept for this session only."""

# Leading decimal number, optionally signed, with an optional exponent.
# Trailing text after the number is ignored ("12.5MW" -> 12.5).
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_capacity(value: str | float | None) -> float:
    """Parse the capacity typed into the form.

    Reads the leading number of the text and ignores anything after it.
    Text without a leading number, non-finite values and negative values
    all give ``0.0``.

    Args:
        value: Raw form value, usually text such as ``"12.50"``.

    Returns:
        float: Capacity in megawatts, never negative.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT.match(value)
        if match is None:
            return 0.0
        try:
            number = float(match.group(1))
        except (ValueError, OverflowError):
            return 0.0
    if not math.isfinite(number) or number <= 0:
        return 0.0
    return number


def compose_demand_type(selection: str, qualifier: str | None = None) -> str:
    """Build the stored demand-type label.

    The ``"其他"`` selection with a non-empty qualifier is stored as
    ``"其他-<qualifier>"``; every other selection is stored as-is.
    """
    if selection == OTHER_DEMAND_TYPE and qualifier:
        return f"{OTHER_DEMAND_TYPE}-{qualifier}"
    return selection


def build_insert_payload(form: RegistrationForm) -> InsertPayload:
    """Map a submitted registration form onto the database row."""
    return InsertPayload(
        company_name=form.company_name,
        province=form.province,
        city=form.city,
        district=form.district,
        address=form.address,
        capacity_mw=parse_capacity(form.capacity),
        demand_type=compose_demand_type(form.demand_type, form.demand_type_other),
        industry=form.industry_type,
        contact_name=form.contact_name,
        contact_phone=form.contact_phone,
        contact_email=form.contact_email,
    )


def new_local_id() -> str:
    """Return an identifier unique within the running process."""
    return f"local-{uuid.uuid4().hex}"


def build_local_customer(
    payload: InsertPayload,
    id_factory: Callable[[], str] = new_local_id,
) -> Customer:
    """Build the session-only customer for a registration that was not saved.

    Args:
        payload: The row that the hosted database rejected or never received.
        id_factory: Source of fresh identifiers (injectable for tests).

    Returns:
        Customer: Record ready to be prepended to the store.
    """
    return Customer(
        id=id_factory(),
        company_name=payload.company_name,
        province=payload.province,
        city=payload.city,
        capacity_mw=payload.capacity_mw,
        demand_type=payload.demand_type,
        industry=payload.industry,
        contact=payload.contact_name,
        phone=payload.contact_phone,
    )
