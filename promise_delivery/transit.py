"""
transit.py - Transit Days and Ship Date Resolution
"""

import logging
import re
from datetime import date, datetime
from typing import Callable, Optional

import pytz

from promise_delivery.business_days import BusinessDayCalendar
from promise_delivery.config import DEFAULT_CUTOFF_HOUR, DEFAULT_ORIGIN_TIMEZONE

logger = logging.getLogger(__name__)

HourProvider = Callable[[datetime], int]

# Transit days from the origin by destination ZIP range
#
# | Destination ZIP | Transit Days |
# |-----------------|--------------|
# | 00000-19999     | 1            |
# | 20000-39999     | 2            |
# | 40000-59999     | 3            |
# | 60000-79999     | 4            |
# | 80000-99999     | 5            |
TRANSIT_ZONES = (
    (0, 19999, 1),
    (20000, 39999, 2),
    (40000, 59999, 3),
    (60000, 79999, 4),
    (80000, 99999, 5),
)
DEFAULT_TRANSIT_DAYS = 5

OVERNIGHT_METHODS = ("overnight", "express-overnight")
EXPRESS_METHODS = ("express", "2-day")
EXPRESS_MAX_TRANSIT_DAYS = 2

_LEADING_INTEGER = re.compile(r"\s*([+-]?)([0-9]+)")
MAX_ZIP_DIGITS = 5


def origin_hour_provider(timezone: str = DEFAULT_ORIGIN_TIMEZONE) -> HourProvider:
    """
    Build a function reading the wall-clock hour in the origin's time zone

    Naive datetimes are taken as host-local time before conversion.

    Args:
        timezone: Origin timezone string (e.g., "America/New_York")

    Returns:
        Function mapping a datetime to the origin-zone hour of day
    """
    tz = pytz.timezone(timezone)

    def current_hour(now: datetime) -> int:
        return now.astimezone(tz).hour

    return current_hour


def parse_zip_number(destination_zip) -> Optional[int]:
    """
    Parse the leading integer of a ZIP code

    An optional sign is accepted, so "+12345" reads as 12345. Returns None
    when there are no leading ASCII digits, or when the number has more
    significant digits than any ZIP code.
    """
    if not isinstance(destination_zip, str):
        return None
    match = _LEADING_INTEGER.match(destination_zip)
    if not match:
        return None

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_ZIP_DIGITS:
        return None

    value = int(digits)
    return -value if sign == "-" else value


class TransitResolver:
    """Maps destinations to transit days and orders to ship dates"""

    def __init__(
        self,
        calendar: BusinessDayCalendar,
        hour_provider: Optional[HourProvider] = None,
        cutoff_hour: int = DEFAULT_CUTOFF_HOUR
    ):
        self.calendar = calendar
        self.hour_provider = hour_provider or origin_hour_provider()
        self.cutoff_hour = cutoff_hour

    @staticmethod
    def transit_days(destination_zip: str) -> int:
        """
        Get transit days based on destination ZIP range

        Malformed ZIPs never raise; they get the default transit time.

        Args:
            destination_zip: Destination ZIP code

        Returns:
            Number of transit days
        """
        zip_number = parse_zip_number(destination_zip)
        if zip_number is None:
            logger.debug(f"Unparseable ZIP {destination_zip!r}, using default transit days")
            return DEFAULT_TRANSIT_DAYS

        for low, high, days in TRANSIT_ZONES:
            if low <= zip_number <= high:
                return days

        return DEFAULT_TRANSIT_DAYS

    @classmethod
    def transit_days_for_method(cls, shipping_method_id: Optional[str], destination_zip: str) -> int:
        """
        Get transit days for a specific shipping method

        Unknown method ids fall back to standard transit.

        Args:
            shipping_method_id: Shipping method id
            destination_zip: Destination ZIP code

        Returns:
            Number of transit days
        """
        base_days = cls.transit_days(destination_zip)

        if shipping_method_id in OVERNIGHT_METHODS:
            return 1
        if shipping_method_id in EXPRESS_METHODS:
            return min(EXPRESS_MAX_TRANSIT_DAYS, base_days)
        return base_days

    def ship_date(self, now: Optional[datetime] = None, cutoff_hour: Optional[int] = None) -> date:
        """
        Get the ship date from the cutoff rule

        Orders placed before the cutoff hour (in the origin zone) on a
        business day ship the same day; anything else ships on the next
        business day.

        Args:
            now: Order time, defaults to the current host-local time
            cutoff_hour: Cutoff hour in the origin zone

        Returns:
            Ship date
        """
        if now is None:
            now = datetime.now()
        if cutoff_hour is None:
            cutoff_hour = self.cutoff_hour

        origin_hour = self.hour_provider(now)
        today = now.date()
        before_cutoff = origin_hour < cutoff_hour

        logger.debug(
            f"Cutoff check: origin_hour={origin_hour}, cutoff={cutoff_hour}, "
            f"before_cutoff={before_cutoff}, today={today}"
        )

        if before_cutoff and self.calendar.is_business_day(today):
            return today
        return self.calendar.next_business_day(today)
