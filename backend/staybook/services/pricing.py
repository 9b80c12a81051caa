"""Stay pricing and the non-persisting booking preview."""

from datetime import date
from decimal import Decimal

from staybook.repositories.base import BookingRepository, PropertyRepository
from staybook.reservations.dates import count_nights, require_date_range
from staybook.reservations.errors import CapacityExceededError, PropertyNotFoundError, ValidationError
from staybook.reservations.types import BookingPreview, PropertyInfo
from staybook.services.availability import is_available


def validate_guests(guests: int, prop: PropertyInfo) -> int:
    """Check that ``guests`` is a positive integer within the property's capacity.

    Raises:
        ValidationError: For a missing, non-integer, or non-positive count.
        CapacityExceededError: When the property declares ``max_guests`` and it is exceeded.
    """
    if isinstance(guests, bool) or not isinstance(guests, int) or guests <= 0:
        raise ValidationError("guests", "guests is invalid")
    if prop.max_guests and guests > prop.max_guests:
        raise CapacityExceededError(guests, prop.max_guests)
    return guests


def stay_price(prop: PropertyInfo, check_in: date, check_out: date) -> tuple[int, Decimal]:
    """Return ``(nights, total_price)``; both are zero for a non-positive range."""
    nights = count_nights(check_in, check_out)
    if nights <= 0:
        return 0, Decimal("0")
    return nights, nights * prop.price_per_night


async def preview(
    properties: PropertyRepository,
    bookings: BookingRepository,
    property_id: str,
    check_in: str,
    check_out: str,
    guests: int,
) -> BookingPreview:
    """Quote a candidate stay without persisting anything.

    Validation runs in a fixed order (property, dates, guests, capacity) so a
    capacity error is reported before availability is ever consulted.
    """
    prop = await properties.get_by_id(property_id)
    if prop is None:
        raise PropertyNotFoundError(property_id)

    in_date, out_date = require_date_range(check_in, check_out)
    validate_guests(guests, prop)

    available = await is_available(bookings, property_id, check_in, check_out)
    nights, total_price = stay_price(prop, in_date, out_date)

    return BookingPreview(
        available=available,
        price_per_night=prop.price_per_night,
        nights=nights,
        total_price=total_price,
    )
