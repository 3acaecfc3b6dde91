"""
holidays.py - US Federal Holiday Calculations
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Callable, Dict, FrozenSet

logger = logging.getLogger(__name__)

MONDAY = 0
THURSDAY = 3
SATURDAY = 5
SUNDAY = 6


def format_date_string(value: date) -> str:
    """Canonical YYYY-MM-DD key used for holiday lookups"""
    return value.strftime('%Y-%m-%d')


class HolidayCache:
    """
    Year-keyed holiday cache

    Entries are never invalidated: holiday rules are a static function of
    the year, so a computed set stays correct for the process lifetime.
    """

    def __init__(self):
        self._entries: Dict[int, FrozenSet[str]] = {}

    def get_or_compute(self, year: int, compute: Callable[[int], FrozenSet[str]]) -> FrozenSet[str]:
        """
        Return the cached set for a year, computing and storing it on a miss

        Args:
            year: Year to look up
            compute: Function producing the holiday set for a year

        Returns:
            Holiday set for the year
        """
        if year in self._entries:
            logger.debug(f"Using cached holidays for {year}")
            return self._entries[year]

        holidays = compute(year)
        self._entries[year] = holidays
        logger.info(f"Cached {len(holidays)} holidays for year {year}")
        return holidays

    def __contains__(self, year: int) -> bool:
        return year in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self):
        """Clear holiday cache (useful for testing)"""
        self._entries.clear()
        logger.info("Holiday cache cleared")


class HolidayCalculator:
    """Derives observed US federal holidays for a year"""

    def __init__(self, cache: HolidayCache):
        self.cache = cache

    @staticmethod
    def observed(value: date) -> date:
        """
        Apply weekend observance to a fixed-date holiday

        Saturday holidays are observed on the preceding Friday, Sunday
        holidays on the following Monday.
        """
        weekday = value.weekday()
        if weekday == SATURDAY:
            return value - timedelta(days=1)
        if weekday == SUNDAY:
            return value + timedelta(days=1)
        return value

    @staticmethod
    def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
        """
        Get the nth occurrence of a weekday in a month

        Args:
            year: Year
            month: Month (1-12)
            weekday: Target weekday (Monday=0 ... Sunday=6)
            n: Occurrence, starting at 1

        Returns:
            Date of the nth occurrence
        """
        first = date(year, month, 1)
        offset = (weekday - first.weekday()) % 7
        return first + timedelta(days=offset + (n - 1) * 7)

    @staticmethod
    def last_weekday(year: int, month: int, weekday: int) -> date:
        """Get the last occurrence of a weekday in a month"""
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        offset = (last_day.weekday() - weekday) % 7
        return last_day - timedelta(days=offset)

    def named_holidays(self, year: int) -> Dict[str, date]:
        """
        Get the ten observed US federal holidays for a year, in calendar order

        NOTE: An observed date can fall in the neighbouring year (New Year's
        Day on a Saturday is observed on December 31 of the prior year). It
        is still listed under the year whose holiday it is.

        Args:
            year: Year to get holidays for

        Returns:
            Mapping of holiday name to observed date
        """
        return {
            "New Year's Day": self.observed(date(year, 1, 1)),
            "Martin Luther King Jr. Day": self.nth_weekday(year, 1, MONDAY, 3),
            "Presidents Day": self.nth_weekday(year, 2, MONDAY, 3),
            "Memorial Day": self.last_weekday(year, 5, MONDAY),
            "Independence Day": self.observed(date(year, 7, 4)),
            "Labor Day": self.nth_weekday(year, 9, MONDAY, 1),
            "Columbus Day": self.nth_weekday(year, 10, MONDAY, 2),
            "Veterans Day": self.observed(date(year, 11, 11)),
            "Thanksgiving Day": self.nth_weekday(year, 11, THURSDAY, 4),
            "Christmas Day": self.observed(date(year, 12, 25)),
        }

    def _compute(self, year: int) -> FrozenSet[str]:
        holidays = frozenset(format_date_string(d) for d in self.named_holidays(year).values())
        logger.debug(f"Holidays {year}: {sorted(holidays)}")
        return holidays

    def holidays_for_year(self, year: int) -> FrozenSet[str]:
        """
        Get the observed holiday set for a year (cached)

        Args:
            year: Year to get holidays for

        Returns:
            Frozen set of YYYY-MM-DD strings
        """
        return self.cache.get_or_compute(year, self._compute)

    def is_holiday(self, value: date) -> bool:
        """Check if a date is an observed holiday of its own year"""
        return format_date_string(value) in self.holidays_for_year(value.year)
