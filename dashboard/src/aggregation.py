"""
City-level aggregation of customer capacity.

Turns the full list of customers into two derived views:

- a table of per-city statistics (site count, per-category subtotals and
  total capacity), sorted by total capacity descending, and
- a chart series with one stacked point per city, sorted by the sum of its
  own category values descending.

Both views are recomputed from scratch on every store change. Grouping uses
the exact city string (no trimming or case folding), cities keep their
first-appearance order, and the descending sorts are stable so equal totals
stay in that order.

Each record's demand-type text is classified by case-sensitive substring
match in a fixed priority order (PV, storage, EV charging, optionally
load/HVAC, then other); the first match wins and a record always lands in
exactly one category.

This is a pure module: no I/O, no clock, no state between calls.

CHANGELOG:
- 2026-10-15: Optional load/HVAC category (include_load)
- 2026-10-12: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from dashboard.src.models import (
    ChartDataPoint,
    Customer,
    RegionStat,
    coerce_capacity,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DemandCategory",
    "aggregate_region_stats",
    "build_chart_series",
    "classify_demand_type",
    "coerce_capacity",
    "recompute",
]


class DemandCategory(str, Enum):
    """Capacity bucket a customer's demand type is assigned to."""

    PV = "pv"
    STORAGE = "storage"
    EV = "ev"
    LOAD = "load"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Classification tokens, in priority order.
# ---------------------------------------------------------------------------

_BASE_RULES: tuple[tuple[DemandCategory, tuple[str, ...]], ...] = (
    (DemandCategory.PV, ("光伏",)),
    (DemandCategory.STORAGE, ("储能",)),
    (DemandCategory.EV, ("充电",)),
)

_LOAD_RULE: tuple[DemandCategory, tuple[str, ...]] = (
    DemandCategory.LOAD,
    ("空调", "负荷"),
)


def classify_demand_type(
    demand_type: str | None,
    *,
    include_load: bool = False,
) -> DemandCategory:
    """Assign a demand-type label to exactly one capacity category.

    Args:
        demand_type: Free-text demand-type label. ``None`` or empty text is
            classified as OTHER.
        include_load: Check the load/HVAC tokens after the EV token. When
            disabled those labels fall through to OTHER.

    Returns:
        DemandCategory: The first category whose token occurs in the text.
    """
    text = demand_type or ""
    rules = _BASE_RULES + (_LOAD_RULE,) if include_load else _BASE_RULES
    for category, tokens in rules:
        if any(token in text for token in tokens):
            return category
    return DemandCategory.OTHER


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


@dataclass
class _CityAccumulator:
    """Running per-city subtotals while walking the customer list."""

    site_count: int = 0
    pv: float = 0.0
    storage: float = 0.0
    ev: float = 0.0
    load: float = 0.0
    other: float = 0.0

    def add(self, category: DemandCategory, capacity: float) -> None:
        self.site_count += 1
        if category is DemandCategory.PV:
            self.pv += capacity
        elif category is DemandCategory.STORAGE:
            self.storage += capacity
        elif category is DemandCategory.EV:
            self.ev += capacity
        elif category is DemandCategory.LOAD:
            self.load += capacity
        else:
            self.other += capacity


def _group_by_city(
    customers: Iterable[Customer],
    include_load: bool,
) -> dict[str, _CityAccumulator]:
    """Accumulate per-city subtotals; dict order is first-appearance order."""
    groups: dict[str, _CityAccumulator] = {}
    for customer in customers:
        entry = groups.get(customer.city)
        if entry is None:
            entry = groups[customer.city] = _CityAccumulator()
        category = classify_demand_type(
            customer.demand_type, include_load=include_load
        )
        entry.add(category, coerce_capacity(customer.capacity_mw))
    return groups


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def aggregate_region_stats(
    customers: Iterable[Customer],
    *,
    include_load: bool = False,
) -> list[RegionStat]:
    """Build the per-city statistics table.

    Args:
        customers: The full current customer list (never a delta).
        include_load: Report a separate load/HVAC subtotal.

    Returns:
        list[RegionStat]: One row per distinct city, sorted by ``total_mw``
        descending; ties keep first-appearance order. Empty input gives an
        empty list.
    """
    return _region_stats(_group_by_city(customers, include_load), include_load)


def build_chart_series(
    customers: Iterable[Customer],
    *,
    include_load: bool = False,
) -> list[ChartDataPoint]:
    """Build the stacked chart series.

    The sort key is recomputed from each point's own category values rather
    than taken from the statistics table, so this view can be derived on its
    own.

    Args:
        customers: The full current customer list (never a delta).
        include_load: Report a separate load/HVAC value per point.

    Returns:
        list[ChartDataPoint]: One point per distinct city, sorted by the sum
        of its category values descending; ties keep first-appearance order.
    """
    return _chart_series(_group_by_city(customers, include_load), include_load)


def recompute(
    customers: Iterable[Customer],
    *,
    include_load: bool = False,
) -> tuple[list[RegionStat], list[ChartDataPoint]]:
    """Derive both dashboard views from the current customer list.

    Called by every store mutation. Identical input always yields identical
    output.

    Returns:
        tuple: ``(region_stats, chart_series)``.
    """
    groups = _group_by_city(customers, include_load)
    stats = _region_stats(groups, include_load)
    series = _chart_series(groups, include_load)
    logger.debug("Recomputed %d city rows", len(stats))
    return stats, series


def _region_stats(
    groups: dict[str, _CityAccumulator],
    include_load: bool,
) -> list[RegionStat]:
    rows = []
    for city, entry in groups.items():
        total = entry.pv + entry.storage + entry.ev
        if include_load:
            total += entry.load
        total += entry.other
        rows.append(
            RegionStat(
                city=city,
                site_count=entry.site_count,
                pv_mw=entry.pv,
                storage_mw=entry.storage,
                ev_mw=entry.ev,
                load_mw=entry.load if include_load else None,
                other_mw=entry.other,
                total_mw=total,
            )
        )
    # sorted() is stable, including with reverse=True.
    return sorted(rows, key=lambda row: row.total_mw, reverse=True)


def _chart_series(
    groups: dict[str, _CityAccumulator],
    include_load: bool,
) -> list[ChartDataPoint]:
    points = [
        ChartDataPoint(
            name=city,
            pv=entry.pv,
            storage=entry.storage,
            ev=entry.ev,
            load=entry.load if include_load else None,
            other=entry.other,
        )
        for city, entry in groups.items()
    ]
    return sorted(points, key=_point_total, reverse=True)


def _point_total(point: ChartDataPoint) -> float:
    total = point.pv + point.storage + point.ev
    if point.load is not None:
        total += point.load
    return total + point.other
