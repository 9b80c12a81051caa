"""Property routes used by the reservation flow — read, availability, preview, delete."""

from fastapi import APIRouter, Depends, Query

from staybook.api.deps import CallerContext, get_current_caller, get_reservation_service
from staybook.reservations.errors import ValidationError
from staybook.schemas.property import (
    AvailabilityResponse,
    BookingPreviewResponse,
    PropertyDeleteResponse,
    PropertyResponse,
)
from staybook.services.reservations import ReservationService

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def _require_dates(check_in: str | None, check_out: str | None) -> tuple[str, str]:
    check_in = (check_in or "").strip()
    check_out = (check_out or "").strip()
    if not check_in or not check_out:
        raise ValidationError("check_in" if not check_in else "check_out", "check_in and check_out are required")
    return check_in, check_out


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get a property",
)
async def get_property(
    property_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> PropertyResponse:
    prop = await service.get_property(property_id)
    return PropertyResponse.model_validate(prop)


@router.get(
    "/{property_id}/availability",
    response_model=AvailabilityResponse,
    summary="Check whether a property is free for a date range",
)
async def get_availability(
    property_id: str,
    check_in: str | None = Query(None, description="Check-in date (YYYY-MM-DD)"),
    check_out: str | None = Query(None, description="Check-out date (YYYY-MM-DD)"),
    service: ReservationService = Depends(get_reservation_service),
) -> AvailabilityResponse:
    check_in, check_out = _require_dates(check_in, check_out)
    available = await service.check_availability(property_id, check_in, check_out)
    return AvailabilityResponse(available=available)


@router.get(
    "/{property_id}/booking-preview",
    response_model=BookingPreviewResponse,
    summary="Quote a stay without booking it",
)
async def get_booking_preview(
    property_id: str,
    check_in: str | None = Query(None, description="Check-in date (YYYY-MM-DD)"),
    check_out: str | None = Query(None, description="Check-out date (YYYY-MM-DD)"),
    guests: int = Query(1, description="Number of guests"),
    service: ReservationService = Depends(get_reservation_service),
) -> BookingPreviewResponse:
    check_in, check_out = _require_dates(check_in, check_out)
    preview = await service.preview(property_id, check_in, check_out, guests)
    return BookingPreviewResponse.model_validate(preview)


@router.delete(
    "/{property_id}",
    response_model=PropertyDeleteResponse,
    summary="Delete a property and its bookings",
)
async def delete_property(
    property_id: str,
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> PropertyDeleteResponse:
    """Only the property's host (or an admin) may delete it; its bookings go with it."""
    removed = await service.delete_property(caller.user_id, property_id, privileged=caller.is_privileged)
    return PropertyDeleteResponse(message="Property deleted", deleted_bookings=removed)
