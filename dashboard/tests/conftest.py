"""
Shared test fixtures for dashboard tests.

Cleans every dashboard environment variable before each test and isolates
the working directory so no .env file is picked up. Provides a mocked
hosted-database client and a TestClient built around it, so no test ever
reaches the network.

CHANGELOG:
- 2026-10-14: Add api_client fixture with injected database client (STORY-011)
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from dashboard.src.models import CustomerRow
from dashboard.src.result import Ok

# All DashboardSettings environment variable names, used for cleanup.
_ALL_DASHBOARD_ENV_VARS = (
    "SUPABASE_URL",
    "VITE_SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "VITE_SUPABASE_ANON_KEY",
    "CUSTOMERS_TABLE",
    "REQUEST_TIMEOUT_S",
    "FETCH_POLICY",
    "INCLUDE_LOAD_CATEGORY",
    "CORS_ORIGINS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_dashboard_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all dashboard env vars and isolate from .env files."""
    for var in _ALL_DASHBOARD_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def make_row(
    id: str,
    city: str,
    capacity_mw: object,
    demand_type: str,
    **extra: object,
) -> CustomerRow:
    """Build a CustomerRow as returned by the hosted table."""
    fields = {
        "id": id,
        "company_name": f"公司-{id}",
        "province": "",
        "city": city,
        "capacity_mw": capacity_mw,
        "demand_type": demand_type,
        "industry": None,
        "contact_name": None,
        "contact_phone": None,
    }
    fields.update(extra)
    return CustomerRow.model_validate(fields)


@pytest.fixture()
def scenario_rows() -> list[CustomerRow]:
    """Two Shanghai sites (PV + storage) and one Beijing EV site."""
    return [
        make_row(
            "r1",
            "上海",
            2.5,
            "光伏",
            contact_name="张三",
            contact_phone="13800138000",
        ),
        make_row("r2", "上海", 1.0, "储能"),
        make_row("r3", "北京", 3.0, "充电桩"),
    ]


@pytest.fixture()
def db_client(scenario_rows: list[CustomerRow]) -> AsyncMock:
    """Mock hosted-database client returning the scenario rows.

    Returns:
        AsyncMock: ``fetch_all`` returns ``Ok(scenario_rows)`` and
        ``insert`` returns ``Ok(None)`` unless a test overrides them.
    """
    client = AsyncMock()
    client.fetch_all = AsyncMock(return_value=Ok(scenario_rows))
    client.insert = AsyncMock(return_value=Ok(None))
    return client


@pytest.fixture()
def api_client(db_client: AsyncMock) -> Generator[TestClient, None, None]:
    """Create a FastAPI TestClient around the mocked database client.

    Uses a context manager so the lifespan (and the initial load) runs.
    """
    from dashboard.src.api.main import create_app
    from dashboard.src.config import DashboardSettings

    app = create_app(settings=DashboardSettings(), client=db_client)
    with TestClient(app) as test_client:
        yield test_client
