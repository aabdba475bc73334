"""
Pydantic models for customers, derived city statistics and registrations.

Customer records are immutable snapshots: the store replaces or prepends
whole records and never edits one in place. Capacity values are coerced to
a finite, non-negative float when a record is built, so malformed data from
the database or the registration form degrades to zero instead of failing.

CHANGELOG:
- 2026-10-19: Treat underscore-grouped digit strings as non-numeric
- 2026-10-15: Add optional load/HVAC subtotal to RegionStat and ChartDataPoint
- 2026-10-12: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

DEMAND_TYPES: tuple[str, ...] = ("光伏", "储能", "充电桩", "其他")
"""Demand-type labels offered by the registration form."""

OTHER_DEMAND_TYPE = "其他"


def coerce_capacity(value: object) -> float:
    """Coerce a raw capacity value to a finite, non-negative float.

    Accepts numbers and numeric strings (surrounding whitespace allowed).
    Anything else -- ``None``, booleans, non-numeric text (including
    underscore-grouped digits such as ``"1_000"``), NaN, infinities
    and negative numbers -- becomes ``0.0``.

    Args:
        value: Raw capacity as received from the database or a form.

    Returns:
        float: Capacity in megawatts, never negative.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        # float() also reads "1_000"; plain decimal text only.
        if not value or "_" in value:
            return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number <= 0:
        return 0.0
    return number


class Customer(BaseModel):
    """A registered demand/resource site as held by the customer store.

    Attributes:
        id: Opaque identifier, unique within the store.
        company_name: Registered company name.
        province: Province of the site.
        city: City of the site; the exact string is the grouping key.
        capacity_mw: Capacity in megawatts (coerced, never negative).
        demand_type: Free-text demand-type label, e.g. ``"光伏"`` or
            ``"其他-需求响应"``.
        industry: Industry description, may be empty.
        contact: Contact person name.
        phone: Contact phone number.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    company_name: str = ""
    province: str = ""
    city: str = ""
    capacity_mw: float = 0.0
    demand_type: str = ""
    industry: str = ""
    contact: str = ""
    phone: str = ""

    @field_validator("capacity_mw", mode="before")
    @classmethod
    def _coerce_capacity(cls, v: object) -> float:
        return coerce_capacity(v)

    @field_validator(
        "company_name", "province", "city", "demand_type", "industry", "contact", "phone",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v


class CustomerRow(BaseModel):
    """A single row of the hosted customers table.

    Nullable text columns are kept as ``None`` here and mapped to empty
    strings by :meth:`to_customer`.
    """

    id: str
    company_name: str = ""
    province: str = ""
    city: str = ""
    capacity_mw: float = 0.0
    demand_type: str | None = None
    industry: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    created_at: datetime | None = None

    @field_validator("company_name", "province", "city", mode="before")
    @classmethod
    def _none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: object) -> object:
        # Integer primary keys are common on hosted tables.
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("capacity_mw", mode="before")
    @classmethod
    def _coerce_capacity(cls, v: object) -> float:
        return coerce_capacity(v)

    def to_customer(self) -> Customer:
        """Map the database row onto a store :class:`Customer`."""
        return Customer(
            id=self.id,
            company_name=self.company_name,
            province=self.province,
            city=self.city,
            capacity_mw=self.capacity_mw,
            demand_type=self.demand_type or "",
            industry=self.industry or "",
            contact=self.contact_name or "",
            phone=self.contact_phone or "",
        )


class RegionStat(BaseModel):
    """One aggregated table row per distinct city.

    ``total_mw`` is always the sum of the category subtotals. ``load_mw`` is
    ``None`` when the load/HVAC category is not enabled.
    """

    city: str
    site_count: int
    pv_mw: float
    storage_mw: float
    ev_mw: float
    load_mw: float | None = None
    other_mw: float
    total_mw: float


class ChartDataPoint(BaseModel):
    """One stacked-chart data point per distinct city."""

    name: str
    pv: float
    storage: float
    ev: float
    load: float | None = None
    other: float


class RegistrationForm(BaseModel):
    """Fields submitted by the resource registration form.

    ``capacity`` is the raw text typed by the user; it is parsed when the
    insert payload is built. ``demand_type_other`` is only used when
    ``demand_type`` is the ``"其他"`` sentinel.
    """

    company_name: str
    province: str = ""
    city: str = ""
    district: str | None = None
    address: str = ""
    capacity: str | float = "0.00"
    demand_type: str = DEMAND_TYPES[0]
    demand_type_other: str = ""
    industry_type: str = ""
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""


class InsertPayload(BaseModel):
    """Row sent to the hosted customers table on registration."""

    company_name: str
    province: str
    city: str
    district: str | None = None
    address: str = ""
    capacity_mw: float
    demand_type: str
    industry: str = ""
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
