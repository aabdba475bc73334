"""
Dashboard service configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
The hosted database endpoint and access key are optional: when they are
missing or empty, inert placeholder values are substituted so the service
still starts and serves the demo dataset.

CHANGELOG:
- 2026-10-14: Accept VITE_-prefixed variable names from the front-end build
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

PLACEHOLDER_URL = "https://placeholder.supabase.co"
PLACEHOLDER_KEY = "placeholder-key"


class DashboardSettings(BaseSettings):
    """Dashboard service configuration.

    Attributes:
        supabase_url: Base URL of the hosted database (PostgREST endpoint
            root). Read from SUPABASE_URL or VITE_SUPABASE_URL.
        supabase_anon_key: Access key sent with every request. Read from
            SUPABASE_ANON_KEY or VITE_SUPABASE_ANON_KEY.
        customers_table: Table holding the registered customers.
        request_timeout_s: Timeout for a single database request.
        fetch_policy: ``replace`` shows only fetched rows; ``merge`` shows
            fetched rows followed by the demo dataset.
        include_load_category: Enable the fourth load/HVAC demand category.
        cors_origins: Comma-separated list of allowed dashboard origins.
        log_level: Root log level for the service.
    """

    supabase_url: str = Field(
        default=PLACEHOLDER_URL,
        validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"),
    )
    supabase_anon_key: str = Field(
        default=PLACEHOLDER_KEY,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY"),
    )
    customers_table: str = "vpp_customers_netlify"
    request_timeout_s: float = 10.0
    fetch_policy: Literal["replace", "merge"] = "replace"
    include_load_category: bool = False
    cors_origins: str = "*"
    log_level: str = "INFO"

    @field_validator("supabase_url", mode="before")
    @classmethod
    def _url_or_placeholder(cls, v: str | None) -> str:
        """Substitute the placeholder URL for empty values, drop trailing slash."""
        if v is None or not str(v).strip():
            return PLACEHOLDER_URL
        return str(v).strip().rstrip("/")

    @field_validator("supabase_anon_key", mode="before")
    @classmethod
    def _key_or_placeholder(cls, v: str | None) -> str:
        """Substitute the placeholder key for empty values."""
        if v is None or not str(v).strip():
            return PLACEHOLDER_KEY
        return str(v).strip()

    @field_validator("request_timeout_s")
    @classmethod
    def request_timeout_must_be_positive(cls, v: float) -> float:
        """Validate the request timeout is strictly positive."""
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_S must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    @property
    def is_placeholder(self) -> bool:
        """True when either connection value is still the inert placeholder."""
        return (
            self.supabase_url == PLACEHOLDER_URL
            or self.supabase_anon_key == PLACEHOLDER_KEY
        )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parsed CORS origins, blank entries skipped."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }
