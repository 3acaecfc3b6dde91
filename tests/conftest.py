import pytest

from promise_delivery.business_days import BusinessDayCalendar
from promise_delivery.calculator import DeliveryCalculator, build_calculator
from promise_delivery.config import ConfigCache
from promise_delivery.holidays import HolidayCache, HolidayCalculator
from promise_delivery.transit import TransitResolver

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    for name in (
        "PROMISE_CUTOFF_HOUR",
        "PROMISE_ORIGIN_TIMEZONE",
        "PROMISE_ORIGIN_ZIP",
        "PROMISE_ZIP_STORE_PATH",
        "PROMISE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    ConfigCache.clear_cache()
    yield
    ConfigCache.clear_cache()


@pytest.fixture
def holiday_cache():
    return HolidayCache()


@pytest.fixture
def holidays(holiday_cache):
    return HolidayCalculator(holiday_cache)


@pytest.fixture
def calendar(holidays):
    return BusinessDayCalendar(holidays)


@pytest.fixture
def resolver_at(calendar):
    """Resolver whose origin-zone hour is pinned to the given value."""
    def make(hour: int) -> TransitResolver:
        return TransitResolver(calendar, hour_provider=lambda now: hour)
    return make


@pytest.fixture
def calculator(holiday_cache) -> DeliveryCalculator:
    """Calculator reading the real America/New_York wall clock."""
    return build_calculator(holiday_cache)
