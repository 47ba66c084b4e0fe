"""
Tests for core.time - Clock protocol and calendar-date helpers.
"""

import pytest
from datetime import date, datetime, timezone, timedelta

from core.time.clock import (
    FixedClock,
    SystemClock,
    set_default_clock,
    get_default_clock,
    local_date,
    local_today,
    now_utc,
)
from core.time.temporal import (
    StayRange,
    add_days,
    coerce_date,
    days_in_month,
    format_local_date,
    is_in_month,
    nights_between,
    parse_local_date,
)


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        clock = SystemClock()
        dt = clock.now_utc()
        assert dt.tzinfo is not None
        assert dt.tzinfo == timezone.utc

    def test_time_advances(self):
        clock = SystemClock()
        t1 = clock.now_utc()
        t2 = clock.now_utc()
        assert t2 >= t1


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed  # Same every time

    def test_rejects_naive_datetime(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_advance(self):
        fixed = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(60)
        assert clock.now_utc() == fixed + timedelta(seconds=60)


class TestDefaultClock:
    def test_set_and_get_default(self):
        original = get_default_clock()
        fixed = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        set_default_clock(fixed)
        try:
            assert now_utc() == datetime(2025, 1, 1, tzinfo=timezone.utc)
        finally:
            set_default_clock(original)


class TestLocalToday:
    def test_utc_day(self):
        clock = FixedClock(datetime(2025, 3, 1, 23, 30, tzinfo=timezone.utc))
        assert local_today(clock) == date(2025, 3, 1)

    def test_hotel_timezone_ahead_of_utc(self):
        # 23:30 UTC is already the next morning in Kiritimati (UTC+14)
        clock = FixedClock(datetime(2025, 3, 1, 23, 30, tzinfo=timezone.utc))
        assert local_today(clock, tz="Pacific/Kiritimati") == date(2025, 3, 2)

    def test_hotel_timezone_behind_utc(self):
        clock = FixedClock(datetime(2025, 3, 1, 2, 0, tzinfo=timezone.utc))
        assert local_today(clock, tz="America/New_York") == date(2025, 2, 28)

    def test_local_date_of_stored_timestamp(self):
        stamp = datetime(2025, 3, 31, 23, 0, tzinfo=timezone.utc)
        assert local_date(stamp) == date(2025, 3, 31)
        assert local_date(stamp, tz="Europe/Madrid") == date(2025, 4, 1)

    def test_local_date_reads_naive_as_utc(self):
        assert local_date(datetime(2025, 3, 31, 23, 0), tz="Europe/Madrid") == date(2025, 4, 1)
        assert local_date(date(2025, 3, 31), tz="Europe/Madrid") == date(2025, 3, 31)
        assert local_date(None) is None


# ── Date Strings ─────────────────────────────────────────────

class TestLocalDateStrings:
    def test_parse(self):
        assert parse_local_date("2025-03-10") == date(2025, 3, 10)

    def test_format_zero_pads(self):
        assert format_local_date(date(2025, 3, 1)) == "2025-03-01"

    @pytest.mark.parametrize("offset", range(-400, 401, 7))
    def test_round_trip_across_year_boundaries(self, offset):
        day = add_days(date(2025, 1, 1), offset)
        assert parse_local_date(format_local_date(day)) == day

    def test_parse_ignores_time_suffix(self):
        assert parse_local_date("2025-03-10T15:00:00Z") == date(2025, 3, 10)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_local_date("not-a-date")

    def test_coerce_accepts_date_datetime_and_string(self):
        assert coerce_date(date(2025, 1, 2)) == date(2025, 1, 2)
        assert coerce_date(datetime(2025, 1, 2, 18, 0)) == date(2025, 1, 2)
        assert coerce_date("2025-01-02") == date(2025, 1, 2)

    def test_coerce_rejects_none(self):
        with pytest.raises(ValueError, match="calendar date"):
            coerce_date(None)


# ── Calendar Arithmetic ──────────────────────────────────────

class TestCalendarArithmetic:
    def test_add_days_crosses_month(self):
        assert add_days(date(2025, 1, 30), 3) == date(2025, 2, 2)

    def test_add_days_negative(self):
        assert add_days(date(2025, 3, 1), -1) == date(2025, 2, 28)

    def test_nights_between(self):
        assert nights_between(date(2025, 3, 10), date(2025, 3, 13)) == 3
        assert nights_between(date(2025, 3, 10), date(2025, 3, 10)) == 0

    def test_days_in_month(self):
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 12) == 31

    def test_is_in_month_uses_zero_based_index(self):
        assert is_in_month(date(2025, 1, 15), 2025, 0)
        assert not is_in_month(date(2025, 1, 15), 2025, 1)


# ── StayRange ────────────────────────────────────────────────

class TestStayRange:
    def test_back_to_back_do_not_overlap(self):
        first = StayRange(date(2025, 3, 10), date(2025, 3, 12))
        second = StayRange(date(2025, 3, 12), date(2025, 3, 14))
        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_overlap_is_symmetric(self):
        a = StayRange(date(2025, 3, 10), date(2025, 3, 14))
        b = StayRange(date(2025, 3, 13), date(2025, 3, 20))
        assert a.overlaps(b) and b.overlaps(a)

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError, match="check_in"):
            StayRange(date(2025, 3, 12), date(2025, 3, 10))

    def test_empty_range(self):
        stay = StayRange(date(2025, 3, 10), date(2025, 3, 10))
        assert stay.is_empty
        assert not stay.overlaps(StayRange(date(2025, 3, 1), date(2025, 3, 31)))
