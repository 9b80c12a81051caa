"""Pydantic v2 response schemas for property endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class PropertyResponse(BaseModel):
    """The property fields the reservation flow exposes."""

    id: str
    host_id: str
    title: str
    description: str | None = None
    location: str | None = None
    price_per_night: Decimal
    max_guests: int | None = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    available: bool


class BookingPreviewResponse(BaseModel):
    """Quote for a candidate stay; nothing is persisted."""

    available: bool
    price_per_night: Decimal
    nights: int
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class PropertyDeleteResponse(BaseModel):
    message: str
    deleted_bookings: int
