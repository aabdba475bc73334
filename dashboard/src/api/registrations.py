"""
POST /v1/registrations endpoint for new resource registrations.

Accepts the registration form as JSON and hands it to the dashboard
service. A rejected or unreachable database is not an error for the
caller: the registration is kept for the current session and the response
carries a notice saying so.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-013)

TODO:
- None
"""

from fastapi import APIRouter, status
from pydantic import BaseModel

from dashboard.src.api.dashboard import CustomerOut
from dashboard.src.api.deps import Service
from dashboard.src.models import RegistrationForm

router = APIRouter(prefix="/v1", tags=["registrations"])


class RegistrationResponse(BaseModel):
    """Response from the registration endpoint.

    Attributes:
        persisted: True when the hosted database stored the registration.
        notice: One-time message for the user when it was kept locally.
        customer: The session-only record when it was kept locally.
    """

    persisted: bool
    notice: str | None = None
    customer: CustomerOut | None = None


@router.post(
    "/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(form: RegistrationForm, service: Service) -> RegistrationResponse:
    """Register a new resource.

    Args:
        form: Submitted registration fields.
        service: Dashboard service from app.state.

    Returns:
        RegistrationResponse: Whether the row was persisted, plus the local
        record and notice when it was not.
    """
    outcome = await service.register(form)
    return RegistrationResponse(
        persisted=outcome.persisted,
        notice=outcome.notice,
        customer=(
            CustomerOut.from_customer(outcome.customer)
            if outcome.customer is not None
            else None
        ),
    )
