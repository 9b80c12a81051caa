"""Plain record types shared by every storage backend."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")

NOTIFICATION_TYPES = ("booking_confirmed", "booking_cancelled")


@dataclass(frozen=True)
class Booking:
    """A stored reservation. ``status`` is the persisted value, not the effective one."""

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


@dataclass(frozen=True)
class NewBooking:
    """Fields supplied by the engine when persisting a booking."""

    property_id: str
    user_id: str
    check_in: str
    check_out: str
    guests: int
    total_price: Decimal
    status: str = "confirmed"


@dataclass(frozen=True)
class PropertyInfo:
    """The slice of a property the reservation engine reads."""

    id: str
    host_id: str
    title: str
    price_per_night: Decimal
    max_guests: int | None = None  # None or 0 = no declared capacity
    description: str | None = None
    location: str | None = None


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    type: str
    title: str
    message: str
    link: str | None
    read: bool
    created_at: datetime


@dataclass(frozen=True)
class BookingPreview:
    """Non-persisting quote for a candidate stay."""

    available: bool
    price_per_night: Decimal
    nights: int
    total_price: Decimal
