"""
Read-only dashboard endpoints.

Serves the customer list (contact fields masked), the per-city statistics
table, the stacked chart series and a combined snapshot of all three. All
data comes from the in-memory customer store; nothing here mutates it
except the explicit refresh route, which re-runs the service load.

CHANGELOG:
- 2026-10-15: Omit load/HVAC values when that category is disabled
- 2026-10-14: Initial creation (STORY-012)

TODO:
- None
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from dashboard.src.api.deps import Service
from dashboard.src.masking import mask_name, mask_phone
from dashboard.src.models import DEMAND_TYPES, ChartDataPoint, Customer, RegionStat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["dashboard"])


# ---------------------------------------------------------------------------
# Pydantic response models
# ---------------------------------------------------------------------------


class CustomerOut(BaseModel):
    """Customer as shown in the public list, with masked contact fields."""

    id: str
    company_name: str
    province: str
    city: str
    capacity_mw: float
    demand_type: str
    industry: str
    contact: str
    phone: str

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerOut":
        return cls(
            id=customer.id,
            company_name=customer.company_name,
            province=customer.province,
            city=customer.city,
            capacity_mw=customer.capacity_mw,
            demand_type=customer.demand_type,
            industry=customer.industry,
            contact=mask_name(customer.contact),
            phone=mask_phone(customer.phone),
        )


class DashboardResponse(BaseModel):
    """Combined dashboard snapshot.

    Attributes:
        source: Where the customers came from (backend, merged or demo).
        site_count: Number of customers across all cities.
        total_mw: Total capacity across all cities.
        region_stats: Per-city statistics, largest total first.
        chart_series: Per-city chart points, largest total first.
        customers: Customer list, newest first, contacts masked.
    """

    source: str
    site_count: int
    total_mw: float
    region_stats: list[RegionStat]
    chart_series: list[ChartDataPoint]
    customers: list[CustomerOut]


class RefreshResponse(BaseModel):
    source: str
    count: int


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/customers", response_model=list[CustomerOut])
async def list_customers(service: Service) -> list[CustomerOut]:
    """Return all customers in store order with masked contact fields."""
    return [CustomerOut.from_customer(c) for c in service.store.customers]


@router.get(
    "/region-stats",
    response_model=list[RegionStat],
    response_model_exclude_none=True,
)
async def region_stats(service: Service) -> list[RegionStat]:
    """Return the per-city statistics table."""
    return service.store.region_stats


@router.get(
    "/chart-series",
    response_model=list[ChartDataPoint],
    response_model_exclude_none=True,
)
async def chart_series(service: Service) -> list[ChartDataPoint]:
    """Return the per-city stacked chart series."""
    return service.store.chart_series


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    response_model_exclude_none=True,
)
async def dashboard(service: Service) -> DashboardResponse:
    """Return statistics, chart series and customers in one snapshot."""
    store = service.store
    stats = store.region_stats
    return DashboardResponse(
        source=service.source.value,
        site_count=sum(row.site_count for row in stats),
        total_mw=sum(row.total_mw for row in stats),
        region_stats=stats,
        chart_series=store.chart_series,
        customers=[CustomerOut.from_customer(c) for c in store.customers],
    )


@router.get("/demand-types")
async def demand_types() -> list[str]:
    """Return the demand-type labels offered by the registration form."""
    return list(DEMAND_TYPES)


@router.post("/customers/refresh", response_model=RefreshResponse)
async def refresh(service: Service) -> RefreshResponse:
    """Refetch all customers from the hosted database."""
    outcome = await service.load()
    logger.debug("Refresh: source=%s count=%d", outcome.source.value, outcome.count)
    return RefreshResponse(source=outcome.source.value, count=outcome.count)
