"""Unit tests for calendar date parsing and half-open range arithmetic."""

from datetime import date, datetime

import pytest

from staybook.reservations.dates import count_nights, overlaps, parse_date, require_date_range
from staybook.reservations.errors import ValidationError


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2025-06-01") == date(2025, 6, 1)

    def test_iso_datetime_truncated_to_date(self):
        assert parse_date("2025-06-01T23:30:00") == date(2025, 6, 1)

    def test_surrounding_whitespace_ignored(self):
        assert parse_date("  2025-06-01 ") == date(2025, 6, 1)

    def test_date_and_datetime_objects_pass_through(self):
        assert parse_date(date(2025, 6, 1)) == date(2025, 6, 1)
        assert parse_date(datetime(2025, 6, 1, 12, 0)) == date(2025, 6, 1)

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2025-13-01", "2025-02-30"])
    def test_unparseable_returns_none(self, value):
        assert parse_date(value) is None


class TestOverlaps:
    """Half-open interval semantics."""

    def test_touching_intervals_do_not_overlap(self):
        d = date(2025, 6, 1)
        a = (d.replace(day=1), d.replace(day=5))
        b = (d.replace(day=5), d.replace(day=9))
        assert overlaps(*a, *b) is False
        assert overlaps(*b, *a) is False

    def test_partial_overlap_is_symmetric(self):
        a = (date(2025, 6, 1), date(2025, 6, 5))
        b = (date(2025, 6, 4), date(2025, 6, 8))
        assert overlaps(*a, *b) is True
        assert overlaps(*b, *a) is True

    def test_containment(self):
        outer = (date(2025, 6, 1), date(2025, 6, 15))
        inner = (date(2025, 6, 5), date(2025, 6, 10))
        assert overlaps(*outer, *inner) is True
        assert overlaps(*inner, *outer) is True

    def test_disjoint(self):
        a = (date(2025, 6, 1), date(2025, 6, 5))
        b = (date(2025, 6, 20), date(2025, 6, 25))
        assert overlaps(*a, *b) is False

    def test_identical(self):
        a = (date(2025, 6, 1), date(2025, 6, 5))
        assert overlaps(*a, *a) is True


class TestCountNights:
    def test_three_nights(self):
        assert count_nights(date(2025, 6, 1), date(2025, 6, 4)) == 3

    def test_across_month_boundary(self):
        assert count_nights(date(2025, 6, 29), date(2025, 7, 2)) == 3

    def test_non_positive_for_inverted_range(self):
        assert count_nights(date(2025, 6, 4), date(2025, 6, 1)) == -3
        assert count_nights(date(2025, 6, 4), date(2025, 6, 4)) == 0


class TestRequireDateRange:
    def test_valid_range(self):
        assert require_date_range("2025-06-01", "2025-06-04") == (date(2025, 6, 1), date(2025, 6, 4))

    def test_invalid_check_in_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            require_date_range("garbage", "2025-06-04")
        assert exc_info.value.field == "checkIn"

    def test_invalid_check_out_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            require_date_range("2025-06-01", None)
        assert exc_info.value.field == "checkOut"

    @pytest.mark.parametrize(
        "check_in, check_out",
        [("2025-06-04", "2025-06-01"), ("2025-06-04", "2025-06-04")],
    )
    def test_check_in_must_precede_check_out(self, check_in, check_out):
        with pytest.raises(ValidationError, match="checkIn must be before checkOut"):
            require_date_range(check_in, check_out)
