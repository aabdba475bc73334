"""
HTTP client for the hosted customers table (Supabase PostgREST API).

Exposes the two operations the dashboard needs:

- fetch_all(): every customer row, newest first.
- insert(payload): one new customer row.

Neither operation raises on failure. Connection errors, timeouts, malformed
endpoints or keys, non-2xx responses and undecodable bodies are returned as ``Err(reason)`` so the
caller can choose its fallback path explicitly. Inserts are not idempotent
and are never retried here.

The client can always be constructed, even with the inert placeholder
endpoint and key used when no configuration is present; requests against
the placeholder simply fail and come back as ``Err``.

CHANGELOG:
- 2026-10-19: Map malformed endpoint URLs and non-ASCII keys to Err
- 2026-10-14: Map undecodable response bodies to Err instead of raising
- 2026-10-13: Initial creation (STORY-009)

TODO:
- None
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from dashboard.src.models import CustomerRow, InsertPayload
from dashboard.src.result import Err, Ok, Result

if TYPE_CHECKING:
    from dashboard.src.config import DashboardSettings

logger = logging.getLogger(__name__)

_DEFAULT_TABLE = "vpp_customers_netlify"
_DEFAULT_TIMEOUT_S = 10.0

_ROWS_ADAPTER = TypeAdapter(list[CustomerRow])

# Raised while httpx builds the request: a malformed endpoint URL, or a key
# that cannot be encoded into an ASCII header.
_REQUEST_BUILD_ERRORS = (httpx.InvalidURL, UnicodeEncodeError)


class SupabaseClient:
    """Client for the customers table behind a PostgREST endpoint.

    Args:
        endpoint_url: Project base URL, e.g. ``https://xyz.supabase.co``.
        access_key: Anon/service key sent as ``apikey`` and bearer token.
        table: Name of the customers table.
        timeout_s: Per-request timeout in seconds.

    Usage::

        client = SupabaseClient.from_settings(DashboardSettings())
        result = await client.fetch_all()
        if isinstance(result, Ok):
            rows = result.value
    """

    def __init__(
        self,
        endpoint_url: str,
        access_key: str,
        table: str = _DEFAULT_TABLE,
        timeout_s: float = _DEFAULT_TIMEOUT_S,
    ) -> None:
        self._endpoint_url = endpoint_url.rstrip("/")
        self._access_key = access_key
        self._table = table
        self._timeout_s = timeout_s

    @classmethod
    def from_settings(cls, settings: DashboardSettings) -> SupabaseClient:
        """Build a client from the service configuration."""
        return cls(
            endpoint_url=settings.supabase_url,
            access_key=settings.supabase_anon_key,
            table=settings.customers_table,
            timeout_s=settings.request_timeout_s,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def table_url(self) -> str:
        """REST URL of the customers table."""
        return f"{self._endpoint_url}/rest/v1/{self._table}"

    async def fetch_all(self) -> Result[list[CustomerRow]]:
        """Fetch every customer row ordered by creation time, newest first.

        Returns:
            ``Ok(rows)`` on a 2xx response with a decodable body, otherwise
            ``Err(reason)``.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                response = await client.get(
                    self.table_url,
                    params={"select": "*", "order": "created_at.desc"},
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            logger.warning("Customer fetch failed (network error): %s", exc)
            return Err(f"network error: {exc}")
        except _REQUEST_BUILD_ERRORS as exc:
            logger.warning("Customer fetch failed (invalid request): %s", exc)
            return Err(f"invalid request: {exc}")

        if not response.is_success:
            logger.warning("Customer fetch failed (HTTP %d)", response.status_code)
            return Err(f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            rows = _ROWS_ADAPTER.validate_python(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Customer fetch returned an undecodable body: %s", exc)
            return Err(f"malformed response: {exc}")

        logger.info("Fetched %d customer rows from %s", len(rows), self._table)
        return Ok(rows)

    async def insert(self, payload: InsertPayload) -> Result[None]:
        """Insert one customer row.

        Args:
            payload: The row to persist. Unset optional columns are omitted.

        Returns:
            ``Ok(None)`` on a 2xx response, otherwise ``Err(reason)``.
        """
        headers = self._headers()
        headers["Prefer"] = "return=minimal"
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                response = await client.post(
                    self.table_url,
                    json=[payload.model_dump(exclude_none=True)],
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.warning("Customer insert failed (network error): %s", exc)
            return Err(f"network error: {exc}")
        except _REQUEST_BUILD_ERRORS as exc:
            logger.warning("Customer insert failed (invalid request): %s", exc)
            return Err(f"invalid request: {exc}")

        if not response.is_success:
            logger.warning("Customer insert failed (HTTP %d)", response.status_code)
            return Err(f"HTTP {response.status_code}: {response.text[:200]}")

        logger.info("Inserted customer '%s'", payload.company_name)
        return Ok(None)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._access_key,
            "Authorization": f"Bearer {self._access_key}",
        }
