"""Effective (reader-visible) booking status.

Stored status only ever moves ``confirmed -> cancelled``. ``completed`` is
derived from the calendar on every read and is never written back.
"""

import dataclasses
from datetime import date

from staybook.reservations.dates import parse_date
from staybook.reservations.types import Booking


def effective_status(booking: Booking, today: date | None = None) -> str:
    if booking.status == "cancelled":
        return "cancelled"
    check_out = parse_date(booking.check_out)
    if check_out is None:
        return booking.status
    if today is None:
        today = date.today()
    return "completed" if check_out < today else booking.status


def normalize_booking(booking: Booking, today: date | None = None) -> Booking:
    """Return ``booking`` with its status replaced by the effective status."""
    status = effective_status(booking, today)
    if status == booking.status:
        return booking
    return dataclasses.replace(booking, status=status)
