"""
calculator.py - Delivery Date Calculations
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from promise_delivery.business_days import BusinessDayCalendar
from promise_delivery.config import DEFAULT_CUTOFF_HOUR, DEFAULT_ORIGIN_TIMEZONE, SHIPPING_METHODS
from promise_delivery.holidays import HolidayCache, HolidayCalculator
from promise_delivery.models import DeliveryEstimate, MethodEstimate, ShippingMethod
from promise_delivery.transit import HourProvider, TransitResolver, origin_hour_provider

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def ordinal_suffix(day_of_month: int) -> str:
    """English ordinal suffix for a day of the month (1st, 2nd, 3rd, 4th...)"""
    if day_of_month in (1, 21, 31):
        return "st"
    if day_of_month in (2, 22):
        return "nd"
    if day_of_month in (3, 23):
        return "rd"
    return "th"


def format_short(value: date) -> str:
    """Format as "<Month> <Day><suffix>", e.g. "January 21st" """
    return f"{MONTH_NAMES[value.month - 1]} {value.day}{ordinal_suffix(value.day)}"


def format_full(value: date) -> str:
    """Format as "<Weekday>, <Month> <Day><suffix>", e.g. "Tuesday, January 21st" """
    return f"{WEEKDAY_NAMES[value.weekday()]}, {format_short(value)}"


class DeliveryCalculator:
    """
    Promise date calculator

    Promise Date = Ship Date + Transit Days (business days only)
    """

    def __init__(
        self,
        resolver: TransitResolver,
        shipping_methods: Sequence[ShippingMethod] = SHIPPING_METHODS
    ):
        self.resolver = resolver
        self.calendar = resolver.calendar
        self.shipping_methods = list(shipping_methods)

    def estimate(
        self,
        destination_zip: str,
        shipping_method_id: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> DeliveryEstimate:
        """
        Calculate the promise delivery date

        Args:
            destination_zip: Destination ZIP code
            shipping_method_id: Optional shipping method id; without one the
                base transit time for the ZIP is used
            now: Order time, defaults to the current time

        Returns:
            Delivery estimate with formatted strings
        """
        ship_date = self.resolver.ship_date(now)

        if shipping_method_id:
            transit_days = self.resolver.transit_days_for_method(shipping_method_id, destination_zip)
        else:
            transit_days = self.resolver.transit_days(destination_zip)

        delivery_date = self.calendar.add_business_days(ship_date, transit_days)
        formatted_date = format_short(delivery_date)

        logger.info(
            f"Delivery calculation complete: zip={destination_zip}, method={shipping_method_id}, "
            f"ship={ship_date} + {transit_days} business days = {delivery_date}"
        )

        return DeliveryEstimate(
            ship_date=ship_date,
            delivery_date=delivery_date,
            transit_days=transit_days,
            formatted_date=formatted_date,
            formatted_date_full=format_full(delivery_date),
            display_message=f"Get it by {formatted_date}"
        )

    def estimates_for_all_methods(
        self,
        destination_zip: str,
        now: Optional[datetime] = None
    ) -> List[MethodEstimate]:
        """
        Get delivery estimates for every shipping method in catalog order

        Args:
            destination_zip: Destination ZIP code
            now: Order time shared by every estimate, defaults to the current time

        Returns:
            One estimate per shipping method
        """
        if now is None:
            now = datetime.now()

        return [
            MethodEstimate(method=method, estimate=self.estimate(destination_zip, method.id, now))
            for method in self.shipping_methods
        ]


def build_calculator(
    cache: HolidayCache,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    timezone: str = DEFAULT_ORIGIN_TIMEZONE,
    hour_provider: Optional[HourProvider] = None
) -> DeliveryCalculator:
    """
    Wire holidays, calendar and resolver into a calculator

    Args:
        cache: Holiday cache shared by every calculator in the process
        cutoff_hour: Same-day shipping cutoff hour in the origin zone
        timezone: Origin timezone for the cutoff check
        hour_provider: Override for reading the origin-zone hour

    Returns:
        Configured delivery calculator
    """
    calendar = BusinessDayCalendar(HolidayCalculator(cache))
    resolver = TransitResolver(
        calendar,
        hour_provider=hour_provider or origin_hour_provider(timezone),
        cutoff_hour=cutoff_hour
    )
    return DeliveryCalculator(resolver)
