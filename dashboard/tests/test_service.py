"""
Tests for the dashboard service load and registration paths.

Verifies:
- Fetch failure or an empty table shows the demo dataset.
- A successful fetch replaces (or, with the merge policy, precedes) the
  demo dataset.
- A successful insert triggers a refetch.
- A failed insert prepends a session-only customer and returns a notice.
- A malformed endpoint URL or key degrades the same way instead of raising.

CHANGELOG:
- 2026-10-19: Cover malformed endpoint URLs and keys
- 2026-10-15: Cover the merge fetch policy
- 2026-10-13: Initial creation (STORY-010)

TODO:
- None
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dashboard.src.demo_data import DEMO_CUSTOMERS
from dashboard.src.models import CustomerRow, RegistrationForm
from dashboard.src.persistence import SupabaseClient
from dashboard.src.registration import SESSION_ONLY_NOTICE
from dashboard.src.result import Err, Ok
from dashboard.src.service import DashboardService, DataSource
from dashboard.src.store import CustomerStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _rows() -> list[CustomerRow]:
    return [
        CustomerRow(id="r1", city="上海", capacity_mw=2.5, demand_type="光伏"),
        CustomerRow(id="r2", city="上海", capacity_mw=1.0, demand_type="储能"),
        CustomerRow(id="r3", city="北京", capacity_mw=3.0, demand_type="充电桩"),
    ]


def _client(fetch: object, insert: object = None) -> AsyncMock:
    client = AsyncMock()
    client.fetch_all = AsyncMock(return_value=fetch)
    client.insert = AsyncMock(return_value=insert if insert is not None else Ok(None))
    return client


def _form(**overrides: object) -> RegistrationForm:
    fields: dict[str, object] = {
        "company_name": "天津滨海需求响应中心",
        "province": "天津市",
        "city": "天津",
        "capacity": "20",
        "demand_type": "其他",
        "demand_type_other": "需求响应",
        "contact_name": "何静",
        "contact_phone": "13611112222",
    }
    fields.update(overrides)
    return RegistrationForm.model_validate(fields)


# ---------------------------------------------------------------------------
# load()
# ---------------------------------------------------------------------------


class TestLoad:
    """Fetch paths and the demo fallback."""

    @pytest.mark.asyncio
    async def test_fetch_error_falls_back_to_demo(self) -> None:
        store = CustomerStore()
        service = DashboardService(_client(Err("network error: boom")), store)

        outcome = await service.load()

        assert outcome.source is DataSource.DEMO
        assert outcome.count == len(DEMO_CUSTOMERS)
        assert store.customers == list(DEMO_CUSTOMERS)
        assert service.source is DataSource.DEMO
        assert store.region_stats

    @pytest.mark.asyncio
    async def test_empty_table_falls_back_to_demo(self) -> None:
        store = CustomerStore()
        service = DashboardService(_client(Ok([])), store)

        outcome = await service.load()

        assert outcome.source is DataSource.DEMO
        assert store.customers == list(DEMO_CUSTOMERS)

    @pytest.mark.asyncio
    async def test_fetched_rows_replace_demo(self) -> None:
        store = CustomerStore()
        service = DashboardService(_client(Ok(_rows())), store)

        outcome = await service.load()

        assert outcome.source is DataSource.BACKEND
        assert outcome.count == 3
        assert [c.id for c in store.customers] == ["r1", "r2", "r3"]
        assert [(r.city, r.total_mw) for r in store.region_stats] == [
            ("上海", 3.5),
            ("北京", 3.0),
        ]

    @pytest.mark.asyncio
    async def test_merge_policy_appends_demo(self) -> None:
        store = CustomerStore()
        service = DashboardService(
            _client(Ok(_rows())), store, fetch_policy="merge"
        )

        outcome = await service.load()

        assert outcome.source is DataSource.MERGED
        assert outcome.count == 3 + len(DEMO_CUSTOMERS)
        ids = [c.id for c in store.customers]
        assert ids[:3] == ["r1", "r2", "r3"]
        assert ids[3:] == [c.id for c in DEMO_CUSTOMERS]

    @pytest.mark.asyncio
    async def test_refetch_replaces_previous_rows(self) -> None:
        store = CustomerStore()
        client = _client(Ok(_rows()))
        service = DashboardService(client, store)
        await service.load()

        client.fetch_all.return_value = Ok(_rows()[:1])
        await service.load()

        assert [c.id for c in store.customers] == ["r1"]

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError, match="fetch policy"):
            DashboardService(_client(Ok([])), CustomerStore(), fetch_policy="append")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# register()
# ---------------------------------------------------------------------------


class TestRegister:
    """Insert success refetches; insert failure falls back locally."""

    @pytest.mark.asyncio
    async def test_successful_insert_refetches(self) -> None:
        store = CustomerStore()
        client = _client(Ok(_rows()))
        service = DashboardService(client, store)
        await service.load()

        new_row = CustomerRow(
            id="r4", city="天津", capacity_mw=20.0, demand_type="其他-需求响应"
        )
        client.fetch_all.return_value = Ok([new_row, *_rows()])
        outcome = await service.register(_form())

        assert outcome.persisted is True
        assert outcome.customer is None
        assert outcome.notice is None
        assert client.fetch_all.await_count == 2
        assert store.customers[0].id == "r4"

    @pytest.mark.asyncio
    async def test_insert_payload_sent_to_client(self) -> None:
        client = _client(Ok(_rows()))
        service = DashboardService(client, CustomerStore())

        await service.register(_form())

        (payload,) = client.insert.await_args.args
        assert payload.company_name == "天津滨海需求响应中心"
        assert payload.capacity_mw == 20.0
        assert payload.demand_type == "其他-需求响应"

    @pytest.mark.asyncio
    async def test_failed_insert_keeps_customer_locally(self) -> None:
        store = CustomerStore()
        client = _client(Ok(_rows()), insert=Err("HTTP 401: invalid key"))
        service = DashboardService(client, store)
        await service.load()

        outcome = await service.register(_form())

        assert outcome.persisted is False
        assert outcome.notice == SESSION_ONLY_NOTICE
        assert outcome.customer is not None
        assert store.customers[0] == outcome.customer
        assert len(store) == 4
        # No refetch after a failed insert.
        assert client.fetch_all.await_count == 1

    @pytest.mark.asyncio
    async def test_local_customer_counted_once_as_other(self) -> None:
        store = CustomerStore()
        client = _client(Ok(_rows()), insert=Err("network error"))
        service = DashboardService(client, store)
        await service.load()

        outcome = await service.register(_form())

        assert outcome.customer is not None
        assert outcome.customer.demand_type == "其他-需求响应"
        tianjin = next(r for r in store.region_stats if r.city == "天津")
        assert tianjin.site_count == 1
        assert tianjin.other_mw == 20.0
        assert tianjin.total_mw == 20.0
        assert store.region_stats[0].city == "天津"

    @pytest.mark.asyncio
    async def test_two_failed_registrations_get_distinct_ids(self) -> None:
        store = CustomerStore()
        client = _client(Err("offline"), insert=Err("offline"))
        service = DashboardService(client, store)
        await service.load()

        first = await service.register(_form())
        second = await service.register(_form(company_name="第二家公司"))

        assert first.customer is not None and second.customer is not None
        assert first.customer.id != second.customer.id
        assert [c.company_name for c in store.customers[:2]] == [
            "第二家公司",
            "天津滨海需求响应中心",
        ]
        assert len(store) == len(DEMO_CUSTOMERS) + 2

    @pytest.mark.asyncio
    async def test_successful_insert_with_failing_refetch_shows_demo(self) -> None:
        store = CustomerStore()
        client = _client(Err("offline"))
        service = DashboardService(client, store)

        outcome = await service.register(_form())

        assert outcome.persisted is True
        assert service.source is DataSource.DEMO
        assert store.customers == list(DEMO_CUSTOMERS)


# ---------------------------------------------------------------------------
# Malformed database configuration
# ---------------------------------------------------------------------------


class TestMalformedConfiguration:
    """A real client with an unusable endpoint or key never breaks the service."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("endpoint_url", "access_key"),
        [("https://[::1", "anon-key"), ("https://project.supabase.co", "密钥")],
    )
    async def test_load_falls_back_to_demo(
        self, endpoint_url: str, access_key: str
    ) -> None:
        store = CustomerStore()
        service = DashboardService(SupabaseClient(endpoint_url, access_key), store)

        outcome = await service.load()

        assert outcome.source is DataSource.DEMO
        assert store.customers == list(DEMO_CUSTOMERS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("endpoint_url", "access_key"),
        [("https://[::1", "anon-key"), ("https://project.supabase.co", "密钥")],
    )
    async def test_register_keeps_customer_locally(
        self, endpoint_url: str, access_key: str
    ) -> None:
        store = CustomerStore()
        service = DashboardService(SupabaseClient(endpoint_url, access_key), store)
        await service.load()

        outcome = await service.register(_form())

        assert outcome.persisted is False
        assert outcome.notice == SESSION_ONLY_NOTICE
        assert outcome.customer is not None
        assert store.customers[0] == outcome.customer
        assert len(store) == len(DEMO_CUSTOMERS) + 1
