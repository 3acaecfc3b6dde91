from datetime import date, datetime, timedelta

import pytest

from promise_delivery.business_days import BusinessDayCalendar, CalendarError


class AlwaysClosed:
    """Holiday source that closes every day."""

    def is_holiday(self, value):
        return True


# ── is_business_day ───────────────────────────────────────────────────────────

class TestIsBusinessDay:

    @pytest.mark.parametrize("value", [
        date(2025, 12, 25),  # Christmas, Thursday
        date(2025, 1, 1),
        date(2025, 7, 4),
        date(2025, 11, 27),  # Thanksgiving
    ])
    def test_holidays_closed(self, calendar, value):
        assert calendar.is_business_day(value) is False

    def test_weekends_closed(self, calendar):
        day = date(2024, 1, 6)  # Saturday
        for _ in range(104):
            assert calendar.is_business_day(day) is False
            assert calendar.is_business_day(day + timedelta(days=1)) is False
            day += timedelta(days=7)

    def test_ordinary_weekday_open(self, calendar):
        assert calendar.is_business_day(date(2025, 1, 6)) is True

    def test_accepts_datetime(self, calendar):
        assert calendar.is_business_day(datetime(2025, 12, 25, 16, 45)) is False


# ── next_business_day ─────────────────────────────────────────────────────────

class TestNextBusinessDay:

    def test_never_returns_input(self, calendar):
        assert calendar.next_business_day(date(2025, 1, 6)) == date(2025, 1, 7)

    def test_skips_holiday(self, calendar):
        assert calendar.next_business_day(date(2024, 12, 31)) == date(2025, 1, 2)

    def test_skips_long_weekend(self, calendar):
        # Friday before MLK Day
        assert calendar.next_business_day(date(2025, 1, 17)) == date(2025, 1, 21)

    def test_from_saturday(self, calendar):
        assert calendar.next_business_day(date(2025, 1, 4)) == date(2025, 1, 6)


# ── add_business_days ─────────────────────────────────────────────────────────

class TestAddBusinessDays:

    def test_skips_weekend(self, calendar):
        assert calendar.add_business_days(date(2024, 12, 27), 1) == date(2024, 12, 30)

    def test_skips_christmas(self, calendar):
        assert calendar.add_business_days(date(2024, 12, 24), 1) == date(2024, 12, 26)

    def test_skips_thanksgiving(self, calendar):
        assert calendar.add_business_days(date(2025, 11, 26), 1) == date(2025, 11, 28)

    def test_full_week(self, calendar):
        assert calendar.add_business_days(date(2025, 1, 6), 5) == date(2025, 1, 13)

    @pytest.mark.parametrize("start", [
        date(2025, 1, 6),
        date(2025, 1, 4),   # Saturday
        date(2025, 12, 25), # holiday
    ])
    def test_zero_is_identity(self, calendar, start):
        assert calendar.add_business_days(start, 0) == start

    def test_returns_date_for_datetime_input(self, calendar):
        assert calendar.add_business_days(datetime(2024, 12, 27, 9, 0), 1) == date(2024, 12, 30)


# ── Runaway guard ─────────────────────────────────────────────────────────────

class TestClosedRunGuard:

    def test_next_business_day_raises(self):
        calendar = BusinessDayCalendar(AlwaysClosed())
        with pytest.raises(CalendarError):
            calendar.next_business_day(date(2025, 1, 6))

    def test_add_business_days_raises(self):
        calendar = BusinessDayCalendar(AlwaysClosed())
        with pytest.raises(CalendarError):
            calendar.add_business_days(date(2025, 1, 6), 1)
