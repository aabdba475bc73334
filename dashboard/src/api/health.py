"""
Health check endpoint for the dashboard API.

Returns {"status": "ok"} with HTTP 200 plus the current data source, so a
monitor can tell a live database connection from the demo fallback. No
authentication is required.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-015)

TODO:
- None
"""

from fastapi import APIRouter

from dashboard.src.api.deps import Service

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(service: Service) -> dict[str, str]:
    """Return a simple health status.

    Returns:
        dict: ``{"status": "ok", "source": <data source>}``.
    """
    return {"status": "ok", "source": service.source.value}
