"""Calendar date helpers for half-open ``[check_in, check_out)`` stays."""

from datetime import date, datetime

from dateutil import parser

from staybook.reservations.errors import ValidationError


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO calendar date, returning ``None`` when it cannot be read.

    ISO datetimes are accepted and truncated to their calendar date; no
    timezone conversion is applied.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return parser.isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    # Back-to-back stays (one checkout == the other's check-in) do not overlap.
    return a_start < b_end and b_start < a_end


def count_nights(start: date, end: date) -> int:
    return (end - start).days


def require_date_range(check_in: str | None, check_out: str | None) -> tuple[date, date]:
    """Parse both ends of a stay and enforce ``check_in < check_out``.

    Raises:
        ValidationError: naming the offending field.
    """
    in_date = parse_date(check_in)
    if in_date is None:
        raise ValidationError("checkIn", "Invalid dates")
    out_date = parse_date(check_out)
    if out_date is None:
        raise ValidationError("checkOut", "Invalid dates")
    if in_date >= out_date:
        raise ValidationError("checkOut", "checkIn must be before checkOut")
    return in_date, out_date
