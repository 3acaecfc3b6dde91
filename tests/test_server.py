from datetime import datetime

import pytest
import pytz
from fastmcp import FastMCP

from promise_delivery.business_days import BusinessDayCalendar
from promise_delivery.calculator import DeliveryCalculator
from promise_delivery.server import register_tools
from promise_delivery.transit import TransitResolver

NEW_YORK = pytz.timezone("America/New_York")
MONDAY_BEFORE_CUTOFF = NEW_YORK.localize(datetime(2025, 1, 6, 13, 30))

INVALID_ZIP = {
    "success": False,
    "error": "Invalid ZIP code. Please enter a valid 5-digit US ZIP code.",
    "errorCode": "INVALID_ZIP",
}


class AlwaysClosed:
    def is_holiday(self, value):
        return True


class BrokenCalculator:
    def estimate(self, *args, **kwargs):
        raise RuntimeError("boom")

    def estimates_for_all_methods(self, *args, **kwargs):
        raise RuntimeError("boom")


@pytest.fixture
def tools(calculator):
    return register_tools(FastMCP("test"), calculator, clock=lambda: MONDAY_BEFORE_CUTOFF)


class TestGetEstimate:

    def test_success(self, tools):
        assert tools["get_estimate"]("90210", "standard") == {
            "success": True,
            "zipCode": "90210",
            "shippingMethodId": "standard",
            "transitDays": 5,
            "deliveryDate": "January 13th",
            "deliveryDateFull": "Monday, January 13th",
            "displayMessage": "Get it by January 13th",
        }

    def test_method_defaults_to_standard(self, tools):
        result = tools["get_estimate"]("10001")
        assert result["shippingMethodId"] == "standard"
        assert result["transitDays"] == 1

    def test_overnight(self, tools):
        result = tools["get_estimate"]("90210", "overnight")
        assert result["transitDays"] == 1
        assert result["deliveryDateFull"] == "Tuesday, January 7th"

    def test_signed_zip_uses_its_zone(self, tools):
        result = tools["get_estimate"]("+12345")
        assert result["success"] is True
        assert result["transitDays"] == 1

    def test_zip_echoed_as_given(self, tools):
        result = tools["get_estimate"]("123-45")
        assert result["success"] is True
        assert result["zipCode"] == "123-45"

    @pytest.mark.parametrize("zip_code", [None, "", "1234", "abcde", "１２３４５"])
    def test_invalid_zip(self, tools, zip_code):
        assert tools["get_estimate"](zip_code) == INVALID_ZIP

    def test_calculation_error(self):
        tools = register_tools(FastMCP("test"), BrokenCalculator())
        assert tools["get_estimate"]("90210") == {
            "success": False,
            "error": "Unable to calculate delivery date. Please try again.",
            "errorCode": "CALCULATION_ERROR",
        }

    def test_calendar_error_reported_as_calculation_error(self):
        calendar = BusinessDayCalendar(AlwaysClosed())
        calculator = DeliveryCalculator(TransitResolver(calendar, hour_provider=lambda now: 9))
        tools = register_tools(FastMCP("test"), calculator)

        assert tools["get_estimate"]("90210")["errorCode"] == "CALCULATION_ERROR"


class TestGetAllEstimates:

    def test_success(self, tools):
        result = tools["get_all_estimates"]("90210")

        assert result["success"] is True
        assert result["zipCode"] == "90210"
        assert [m["shippingMethodId"] for m in result["shippingMethods"]] == [
            "standard", "express", "overnight",
        ]
        assert [m["price"] for m in result["shippingMethods"]] == [5.99, 12.99, 24.99]
        assert [m["transitDays"] for m in result["shippingMethods"]] == [5, 2, 1]
        assert result["shippingMethods"][0]["displayMessage"] == "Get it by January 13th"

    def test_invalid_zip(self, tools):
        assert tools["get_all_estimates"]("1234") == INVALID_ZIP

    def test_calculation_error(self):
        tools = register_tools(FastMCP("test"), BrokenCalculator())
        assert tools["get_all_estimates"]("90210") == {
            "success": False,
            "error": "Unable to calculate delivery dates. Please try again.",
            "errorCode": "CALCULATION_ERROR",
        }


class TestServiceTools:

    def test_list_shipping_methods(self, tools):
        result = tools["list_shipping_methods"]()

        assert result["cutoffHour"] == 14
        assert result["timezone"] == "America/New_York"
        assert result["originZip"] == "10001"
        assert [m["shippingMethodId"] for m in result["shippingMethods"]] == [
            "standard", "express", "overnight",
        ]

    def test_health_check(self, tools):
        result = tools["health_check"]()

        assert result["status"] == "healthy"
        assert result["originHour"] == 13
        assert result["shipDate"] == "2025-01-06"

    def test_health_check_reads_clock_once(self, calculator):
        ticks = iter([
            NEW_YORK.localize(datetime(2025, 1, 6, 13, 59, 59)),
            NEW_YORK.localize(datetime(2025, 1, 6, 14, 0, 1)),
        ])
        tools = register_tools(FastMCP("test"), calculator, clock=lambda: next(ticks))

        result = tools["health_check"]()

        assert result["originHour"] == 13
        assert result["shipDate"] == "2025-01-06"

    def test_health_check_unhealthy(self):
        calendar = BusinessDayCalendar(AlwaysClosed())
        calculator = DeliveryCalculator(TransitResolver(calendar, hour_provider=lambda now: 9))
        tools = register_tools(FastMCP("test"), calculator)

        assert tools["health_check"]()["status"] == "unhealthy"
