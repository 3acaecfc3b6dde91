"""
Promise Delivery - estimated delivery dates for a storefront

Promise Date = Ship Date + Transit Days (business days only)

- Ship Date: today if before the 2 PM origin-zone cutoff, else next business day
- Transit Days: based on destination ZIP range and shipping method
- Business Days: exclude weekends and observed US federal holidays

The module-level functions are the in-process library surface; the MCP
tools in promise_delivery.server wrap the same calculator as JSON.
"""

from promise_delivery.calculator import DeliveryCalculator, build_calculator
from promise_delivery.holidays import HolidayCache
from promise_delivery.models import DeliveryEstimate, MethodEstimate, ShippingMethod
from promise_delivery.validators import InputValidator

# One holiday cache per process, shared by every calculator built here
HOLIDAY_CACHE = HolidayCache()

default_calculator: DeliveryCalculator = build_calculator(HOLIDAY_CACHE)

estimate = default_calculator.estimate
estimates_for_all_methods = default_calculator.estimates_for_all_methods
ship_date = default_calculator.resolver.ship_date
transit_days = default_calculator.resolver.transit_days
transit_days_for_method = default_calculator.resolver.transit_days_for_method
is_business_day = default_calculator.calendar.is_business_day
next_business_day = default_calculator.calendar.next_business_day
add_business_days = default_calculator.calendar.add_business_days
holidays_for_year = default_calculator.calendar.holidays.holidays_for_year
is_valid_zip_code = InputValidator.is_valid_zip_code

__all__ = [
    "HOLIDAY_CACHE",
    "DeliveryCalculator",
    "DeliveryEstimate",
    "MethodEstimate",
    "ShippingMethod",
    "add_business_days",
    "build_calculator",
    "default_calculator",
    "estimate",
    "estimates_for_all_methods",
    "holidays_for_year",
    "is_business_day",
    "is_valid_zip_code",
    "next_business_day",
    "ship_date",
    "transit_days",
    "transit_days_for_method",
]
