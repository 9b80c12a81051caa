"""Bookings API router.

Ownership rule: a user can read and cancel only the bookings **they** made,
unless their token carries the admin role. Every booking in a response
carries its effective status.
"""

from fastapi import APIRouter, Depends, Query, status

from staybook.api.deps import CallerContext, get_current_caller, get_reservation_service
from staybook.reservations.errors import PropertyNotFoundError, ValidationError
from staybook.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
)
from staybook.schemas.property import PropertyResponse
from staybook.services.reservations import ReservationService

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List the current user's bookings",
)
async def list_my_bookings(
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> BookingListResponse:
    items = await service.list_for_user(caller.user_id)
    return BookingListResponse(items=[BookingResponse.model_validate(b) for b in items])


@router.get(
    "/property/{property_id}",
    response_model=BookingListResponse,
    summary="List bookings on a property",
)
async def list_property_bookings(
    property_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> BookingListResponse:
    """Public: the calendar of a property is needed to render its availability."""
    items = await service.list_for_property(property_id)
    return BookingListResponse(items=[BookingResponse.model_validate(b) for b in items])


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get one of the current user's bookings",
)
async def get_booking(
    booking_id: str,
    include: str | None = Query(None, description="Pass 'property' to embed the property"),
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> BookingDetailResponse:
    """Return a booking owned by the caller (any booking for admins).

    With ``?include=property`` the property is embedded; a property that has
    since disappeared is reported as ``null`` rather than failing the read.
    """
    booking = await service.get_booking(caller.user_id, booking_id, privileged=caller.is_privileged)
    detail = BookingDetailResponse.model_validate(booking)

    if (include or "").strip().lower() == "property":
        try:
            prop = await service.get_property(booking.property_id)
        except PropertyNotFoundError:
            detail.property = None
        else:
            detail.property = PropertyResponse.model_validate(prop)
    return detail


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking",
)
async def create_booking(
    body: BookingCreate,
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> BookingResponse:
    """Book a property for the current user.

    Fails with 404 for an unknown property, 400 for invalid input or too many
    guests, and 409 when the dates overlap an existing booking.
    """
    booking = await service.create_booking(
        caller.user_id,
        body.property_id,
        body.check_in,
        body.check_out,
        body.guests,
    )
    return BookingResponse.model_validate(booking)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Cancel a booking",
)
async def patch_booking(
    booking_id: str,
    body: BookingStatusUpdate,
    caller: CallerContext = Depends(get_current_caller),
    service: ReservationService = Depends(get_reservation_service),
) -> BookingResponse:
    """Cancel a booking. Cancelling twice returns the same cancelled booking."""
    if body.status.strip() != "cancelled":
        raise ValidationError("status", "Only status=cancelled is supported")

    booking = await service.cancel_booking(caller.user_id, booking_id, privileged=caller.is_privileged)
    return BookingResponse.model_validate(booking)
