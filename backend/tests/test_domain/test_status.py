"""Unit tests for the derived (effective) booking status."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from staybook.reservations.status import effective_status, normalize_booking
from staybook.reservations.types import Booking

TODAY = date(2025, 6, 10)


def _booking(check_out: date | str, status: str = "confirmed") -> Booking:
    if isinstance(check_out, date):
        check_in = (check_out - timedelta(days=3)).isoformat()
        check_out = check_out.isoformat()
    else:
        check_in = "2025-06-01"
    now = datetime.now(timezone.utc)
    return Booking(
        id="b-1",
        property_id="p-1",
        user_id="u-1",
        check_in=check_in,
        check_out=check_out,
        guests=2,
        total_price=Decimal("300"),
        status=status,
        created_at=now,
        updated_at=now,
    )


class TestEffectiveStatus:
    def test_confirmed_checkout_yesterday_is_completed(self):
        booking = _booking(TODAY - timedelta(days=1))
        assert effective_status(booking, TODAY) == "completed"

    def test_confirmed_checkout_tomorrow_is_confirmed(self):
        booking = _booking(TODAY + timedelta(days=1))
        assert effective_status(booking, TODAY) == "confirmed"

    def test_checkout_today_is_not_yet_completed(self):
        booking = _booking(TODAY)
        assert effective_status(booking, TODAY) == "confirmed"

    @pytest.mark.parametrize("offset", [-30, -1, 0, 1, 30])
    def test_cancelled_is_always_cancelled(self, offset):
        booking = _booking(TODAY + timedelta(days=offset), status="cancelled")
        assert effective_status(booking, TODAY) == "cancelled"

    def test_unreadable_checkout_keeps_stored_status(self):
        booking = _booking("not-a-date")
        assert effective_status(booking, TODAY) == "confirmed"

    def test_defaults_to_current_date(self):
        booking = _booking(date.today() - timedelta(days=1))
        assert effective_status(booking) == "completed"


class TestNormalizeBooking:
    def test_does_not_mutate_stored_record(self):
        booking = _booking(TODAY - timedelta(days=1))
        normalized = normalize_booking(booking, TODAY)
        assert normalized.status == "completed"
        assert booking.status == "confirmed"
        assert normalized.id == booking.id
        assert normalized.updated_at == booking.updated_at

    def test_returns_same_object_when_unchanged(self):
        booking = _booking(TODAY + timedelta(days=5))
        assert normalize_booking(booking, TODAY) is booking
