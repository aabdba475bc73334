"""
FastAPI application entry point for the VPP dashboard API.

The application factory builds the settings, the hosted-database client,
the customer store and the dashboard service, keeps them on ``app.state``
and runs the initial customer load at startup. A missing or unreachable
database never prevents startup: the demo dataset is shown instead.

CHANGELOG:
- 2026-10-15: Accept an injected client in create_app for tests
- 2026-10-14: Register health, dashboard and registration routers (STORY-011)

TODO:
- None
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.src.api.dashboard import router as dashboard_router
from dashboard.src.api.health import router as health_router
from dashboard.src.api.registrations import router as registrations_router
from dashboard.src.config import DashboardSettings
from dashboard.src.persistence import SupabaseClient
from dashboard.src.service import DashboardService
from dashboard.src.store import CustomerStore

logger = logging.getLogger(__name__)


def log_config_summary(settings: DashboardSettings) -> None:
    """Log a config summary at startup, excluding the access key."""
    logger.info(
        "Dashboard API starting with config: "
        "supabase_url=%s, customers_table=%s, request_timeout_s=%s, "
        "fetch_policy=%s, include_load_category=%s, placeholder=%s",
        settings.supabase_url,
        settings.customers_table,
        settings.request_timeout_s,
        settings.fetch_policy,
        settings.include_load_category,
        settings.is_placeholder,
    )


def create_app(
    settings: DashboardSettings | None = None,
    client: SupabaseClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service configuration. Loaded from the environment when
            not given.
        client: Hosted-database client. Built from *settings* when not
            given.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or DashboardSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Build the service and run the initial customer load."""
        log_config_summary(settings)
        if settings.is_placeholder:
            logger.warning(
                "Database endpoint or key not configured, demo data will be shown"
            )

        db_client = client or SupabaseClient.from_settings(settings)
        store = CustomerStore(include_load=settings.include_load_category)
        service = DashboardService(
            db_client, store, fetch_policy=settings.fetch_policy
        )
        app.state.settings = settings
        app.state.service = service

        outcome = await service.load()
        logger.info(
            "Dashboard API ready (source=%s, customers=%d)",
            outcome.source.value,
            outcome.count,
        )
        yield
        logger.info("Dashboard API shutting down")

    app = FastAPI(
        title="VPP Resource Dashboard API",
        description="Registered energy resources aggregated by city.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(registrations_router)

    @app.get("/")
    async def root() -> dict:
        """Root health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
