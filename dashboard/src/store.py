"""
In-memory customer store with derived city views.

The store is the single owner of the customer list. Every mutation --
a full replacement after a fetch, or a local registration prepended to the
head of the list -- recomputes the city statistics and chart series before
returning, so readers always see views consistent with the list.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-007)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dashboard.src.aggregation import recompute
from dashboard.src.models import ChartDataPoint, Customer, RegionStat

logger = logging.getLogger(__name__)


class CustomerStore:
    """Holds the current customer list and its derived views.

    Consumers receive copies; the list is only changed through
    :meth:`replace` and :meth:`prepend`.

    Args:
        include_load: Track the load/HVAC category separately in the
            derived views.
    """

    def __init__(self, include_load: bool = False) -> None:
        self._include_load = include_load
        self._customers: list[Customer] = []
        self._region_stats: list[RegionStat] = []
        self._chart_series: list[ChartDataPoint] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def customers(self) -> list[Customer]:
        """Current customers, head first."""
        return list(self._customers)

    @property
    def region_stats(self) -> list[RegionStat]:
        """Per-city statistics for the current customers."""
        return list(self._region_stats)

    @property
    def chart_series(self) -> list[ChartDataPoint]:
        """Per-city chart points for the current customers."""
        return list(self._chart_series)

    @property
    def include_load(self) -> bool:
        return self._include_load

    def __len__(self) -> int:
        return len(self._customers)

    def __contains__(self, customer_id: object) -> bool:
        return any(c.id == customer_id for c in self._customers)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def replace(self, customers: Iterable[Customer]) -> None:
        """Replace the whole list, e.g. after a fetch.

        Records whose identifier was already seen earlier in *customers* are
        dropped with a warning; the first occurrence wins.
        """
        seen: set[str] = set()
        unique: list[Customer] = []
        for customer in customers:
            if customer.id in seen:
                logger.warning(
                    "Dropping customer with duplicate id %s", customer.id
                )
                continue
            seen.add(customer.id)
            unique.append(customer)
        self._customers = unique
        self._refresh()

    def prepend(self, customer: Customer) -> None:
        """Insert a locally registered customer at the head of the list.

        Raises:
            ValueError: If a customer with the same identifier is present.
        """
        if customer.id in self:
            raise ValueError(f"Customer id '{customer.id}' already in store")
        self._customers = [customer, *self._customers]
        self._refresh()

    def _refresh(self) -> None:
        self._region_stats, self._chart_series = recompute(
            self._customers, include_load=self._include_load
        )
