"""Development-only routes (admin)."""

from fastapi import APIRouter, Depends, Request

from staybook.api.deps import CallerContext, get_current_caller, get_reservation_service
from staybook.dev.seed import run_seed
from staybook.reservations.errors import ForbiddenError
from staybook.services.reservations import ReservationService

router = APIRouter(prefix="/api/v1/dev", tags=["dev"])


@router.post("/seed", summary="Reset (memory mode) and seed sample data")
async def seed(
    request: Request,
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> dict:
    if not caller.is_privileged:
        raise ForbiddenError("Admin role required")
    result = await run_seed(request.app.state.repositories, service)
    return {
        "ok": result.ok,
        "properties_count": result.properties_count,
        "bookings_count": result.bookings_count,
        "property_ids": result.property_ids,
    }
