"""
Dashboard service: loads customers and handles registrations.

Wires the hosted-database client to the customer store and implements the
two recovery paths of the dashboard:

- load(): fetch every customer. On any failure, or when the table is
  empty, the store shows the static demo dataset instead. Fetch errors are
  logged, never surfaced.
- register(form): insert the new customer and refetch. If the insert
  fails, the customer is prepended to the store for this session only and
  a one-time notice is returned for the user.

Each path mutates the store exactly once, which recomputes the derived
city views. Registrations are not retried and no locking is done: one
operation runs to completion on the event loop before the next store
change is observed.

CHANGELOG:
- 2026-10-15: Configurable fetch policy (replace or merge with demo data)
- 2026-10-13: Initial creation (STORY-010)

TODO:
- None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

from dashboard.src.demo_data import DEMO_CUSTOMERS
from dashboard.src.models import Customer, RegistrationForm
from dashboard.src.registration import (
    SESSION_ONLY_NOTICE,
    build_insert_payload,
    build_local_customer,
)
from dashboard.src.result import Err

if TYPE_CHECKING:
    from dashboard.src.persistence import SupabaseClient
    from dashboard.src.store import CustomerStore

logger = logging.getLogger(__name__)

FetchPolicy = Literal["replace", "merge"]


class DataSource(str, Enum):
    """Where the customers currently shown came from."""

    BACKEND = "backend"
    MERGED = "merged"
    DEMO = "demo"


@dataclass(frozen=True)
class LoadOutcome:
    """Result of a load: the data source used and the resulting list size."""

    source: DataSource
    count: int


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of a registration.

    Attributes:
        persisted: True when the hosted database accepted the row.
        customer: The session-only record, set only when not persisted.
        notice: Message to show the user once, set only when not persisted.
    """

    persisted: bool
    customer: Customer | None = None
    notice: str | None = None


class DashboardService:
    """Loads and registers customers through an injected database client.

    Args:
        client: Hosted-database client (any object with async ``fetch_all()``
            and ``insert(payload)`` returning ``Ok``/``Err``).
        store: The customer store this service owns writes to.
        fetch_policy: ``replace`` shows only fetched rows; ``merge`` shows
            fetched rows followed by the demo dataset.
    """

    def __init__(
        self,
        client: SupabaseClient,
        store: CustomerStore,
        *,
        fetch_policy: FetchPolicy = "replace",
    ) -> None:
        if fetch_policy not in ("replace", "merge"):
            raise ValueError(f"Unknown fetch policy '{fetch_policy}'")
        self._client = client
        self._store = store
        self._fetch_policy = fetch_policy
        self._source = DataSource.DEMO

    @property
    def store(self) -> CustomerStore:
        return self._store

    @property
    def source(self) -> DataSource:
        """Data source of the last load."""
        return self._source

    async def load(self) -> LoadOutcome:
        """Fetch all customers into the store, falling back to demo data."""
        result = await self._client.fetch_all()

        if isinstance(result, Err):
            logger.warning(
                "Customer fetch failed, falling back to demo data: %s",
                result.reason,
            )
            return self._show_demo()

        rows = result.value
        if not rows:
            logger.info("Customer table is empty, using demo data")
            return self._show_demo()

        customers = [row.to_customer() for row in rows]
        if self._fetch_policy == "merge":
            self._store.replace([*customers, *DEMO_CUSTOMERS])
            self._source = DataSource.MERGED
        else:
            self._store.replace(customers)
            self._source = DataSource.BACKEND

        logger.info(
            "Loaded %d customers (source=%s)", len(self._store), self._source.value
        )
        return LoadOutcome(source=self._source, count=len(self._store))

    async def register(self, form: RegistrationForm) -> RegistrationOutcome:
        """Persist a new registration, or keep it locally when that fails."""
        payload = build_insert_payload(form)
        result = await self._client.insert(payload)

        if isinstance(result, Err):
            logger.warning(
                "Customer insert failed, keeping '%s' for this session only: %s",
                payload.company_name,
                result.reason,
            )
            customer = build_local_customer(payload)
            self._store.prepend(customer)
            return RegistrationOutcome(
                persisted=False,
                customer=customer,
                notice=SESSION_ONLY_NOTICE,
            )

        await self.load()
        return RegistrationOutcome(persisted=True)

    def _show_demo(self) -> LoadOutcome:
        self._store.replace(DEMO_CUSTOMERS)
        self._source = DataSource.DEMO
        return LoadOutcome(source=DataSource.DEMO, count=len(self._store))
