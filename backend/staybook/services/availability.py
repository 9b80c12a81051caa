"""Availability checks against existing bookings of a property."""

import logging

from staybook.repositories.base import BookingRepository
from staybook.reservations.dates import overlaps, parse_date, require_date_range
from staybook.reservations.status import effective_status

logger = logging.getLogger(__name__)


async def is_available(
    bookings: BookingRepository,
    property_id: str,
    check_in: str,
    check_out: str,
) -> bool:
    """Return ``True`` when no non-cancelled booking overlaps ``[check_in, check_out)``.

    Raises:
        ValidationError: If either date is unparseable or ``check_in >= check_out``.
    """
    in_date, out_date = require_date_range(check_in, check_out)

    # Linear in the property's bookings; per-property volume is small.
    for booking in await bookings.list_by_property(property_id):
        if effective_status(booking) == "cancelled":
            continue
        b_in = parse_date(booking.check_in)
        b_out = parse_date(booking.check_out)
        if b_in is None or b_out is None:
            logger.warning(
                "Skipping booking %s on property %s with unreadable dates (%r, %r)",
                booking.id,
                property_id,
                booking.check_in,
                booking.check_out,
            )
            continue
        if overlaps(in_date, out_date, b_in, b_out):
            return False

    return True
