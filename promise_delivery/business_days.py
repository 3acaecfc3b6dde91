"""
business_days.py - Business Day Arithmetic
"""

import logging
from datetime import date, datetime, timedelta
from typing import Union

from promise_delivery.holidays import HolidayCalculator

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class CalendarError(Exception):
    """Raised when business-day stepping cannot find an open day"""


def as_date(value: DateLike) -> date:
    """Normalize a date or datetime to a plain date (local midnight)"""
    if isinstance(value, datetime):
        return value.date()
    return value


class BusinessDayCalendar:
    """Weekday calendar that closes on weekends and observed federal holidays"""

    # Longest possible run of closed days is a long weekend plus a holiday;
    # anything past this means the holiday rules are broken.
    MAX_CONSECUTIVE_CLOSED_DAYS = 14

    def __init__(self, holidays: HolidayCalculator):
        self.holidays = holidays

    @staticmethod
    def is_weekend(value: DateLike) -> bool:
        return as_date(value).weekday() in [5, 6]  # Saturday=5, Sunday=6

    def is_business_day(self, value: DateLike) -> bool:
        """
        Check if a date is a business day (not weekend, not holiday)

        Args:
            value: Date to check

        Returns:
            True if the date is a business day
        """
        day = as_date(value)
        if self.is_weekend(day):
            return False
        return not self.holidays.is_holiday(day)

    def _check_closed_run(self, current: date, closed_run: int):
        if closed_run > self.MAX_CONSECUTIVE_CLOSED_DAYS:
            raise CalendarError(
                f"No business day within {self.MAX_CONSECUTIVE_CLOSED_DAYS} days of {current}"
            )

    def next_business_day(self, value: DateLike) -> date:
        """
        Get the first business day strictly after a date

        Args:
            value: Starting date

        Returns:
            Next business day, never the starting date itself
        """
        next_day = as_date(value) + timedelta(days=1)
        closed_run = 0

        while not self.is_business_day(next_day):
            closed_run += 1
            self._check_closed_run(next_day, closed_run)
            next_day += timedelta(days=1)

        return next_day

    def add_business_days(self, start: DateLike, business_days: int) -> date:
        """
        Add business days to a date, skipping weekends and holidays

        Args:
            start: Starting date (not counted)
            business_days: Number of business days to add

        Returns:
            Date on which the count is reached; the start date when
            business_days is zero
        """
        current = as_date(start)
        days_added = 0
        closed_run = 0

        while days_added < business_days:
            current += timedelta(days=1)
            if self.is_business_day(current):
                days_added += 1
                closed_run = 0
            else:
                closed_run += 1
                self._check_closed_run(current, closed_run)

        logger.debug(f"{as_date(start)} + {business_days} business days = {current}")
        return current
