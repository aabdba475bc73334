"""
FastAPI dependency injection providers.

The dashboard service (and through it the customer store) is built once in
the application lifespan and kept on ``app.state``; route handlers receive
it through the ``Service`` alias.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-011)
"""

from typing import Annotated

from fastapi import Depends, Request

from dashboard.src.service import DashboardService


def get_service(request: Request) -> DashboardService:
    """Return the DashboardService stored on app.state.

    Args:
        request: The incoming FastAPI request.

    Returns:
        DashboardService: The service built at startup.
    """
    return request.app.state.service


# Usage in route handlers:
#   async def my_route(service: Service):
#       stats = service.store.region_stats
Service = Annotated[DashboardService, Depends(get_service)]
