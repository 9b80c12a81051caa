"""Pydantic v2 request/response schemas for booking endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from staybook.schemas.property import PropertyResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking.

    Dates are plain calendar strings (``YYYY-MM-DD``); range, guest count, and
    capacity are validated by the reservation engine so that every rule is
    reported the same way regardless of entry point.
    """

    property_id: str
    check_in: str
    check_out: str
    guests: int


class BookingStatusUpdate(BaseModel):
    """Only ``{"status": "cancelled"}`` is accepted."""

    status: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Booking with its effective status."""

    id: str
    property_id: str
    user_id: str
    check_in: str
    check_out: str
    guests: int
    total_price: Decimal
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking response with the property embedded (``?include=property``)."""

    property: PropertyResponse | None = None


class BookingListResponse(BaseModel):
    items: list[BookingResponse]
