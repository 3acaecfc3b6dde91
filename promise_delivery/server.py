"""
server.py - MCP Tools for Delivery Estimates

Tools never raise: every failure is reported as success=False with an
error message and code.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Dict, Optional

import pytz
from fastmcp import FastMCP

from promise_delivery import HOLIDAY_CACHE
from promise_delivery.calculator import DeliveryCalculator, build_calculator
from promise_delivery.config import ConfigCache
from promise_delivery.models import ErrorCode
from promise_delivery.validators import InputValidator

logger = logging.getLogger(__name__)

CALCULATION_ERROR_MESSAGE = "Unable to calculate delivery date. Please try again."
CALCULATION_ERROR_MESSAGE_ALL = "Unable to calculate delivery dates. Please try again."

Clock = Callable[[], datetime]


def _error(message: str, code: ErrorCode) -> dict:
    return {
        "success": False,
        "error": message,
        "errorCode": code.value
    }


def _invalid_zip() -> dict:
    return _error(InputValidator.INVALID_ZIP_MESSAGE, ErrorCode.INVALID_ZIP)


def register_tools(
    mcp: FastMCP,
    calculator: Optional[DeliveryCalculator] = None,
    clock: Optional[Clock] = None
) -> Dict[str, Callable[..., dict]]:
    """
    Register the delivery estimate tools on an MCP server

    Args:
        mcp: Server to register on
        calculator: Calculator to use, built from configuration if omitted
        clock: Source of the order time, defaults to datetime.now

    Returns:
        Registered tool functions keyed by name
    """
    config = ConfigCache.get_config()
    if calculator is None:
        calculator = build_calculator(
            HOLIDAY_CACHE,
            cutoff_hour=config["cutoff_hour"],
            timezone=config["timezone"]
        )
    if clock is None:
        clock = datetime.now

    def get_estimate(zip_code: str, shipping_method_id: Optional[str] = None) -> dict:
        """
        Estimate the delivery date for a destination ZIP code.

        Returns:
            Dictionary with the promise date or error information
        """
        request_id = f"{int(time.time() * 1000)}"
        logger.info(f"[{request_id}] Estimate request: zip={zip_code}, method={shipping_method_id}")

        if not InputValidator.is_valid_zip_code(zip_code):
            logger.warning(f"[{request_id}] Invalid ZIP code: {zip_code!r}")
            return _invalid_zip()

        try:
            estimate = calculator.estimate(zip_code, shipping_method_id, clock())
        except Exception:
            logger.exception(f"[{request_id}] Unexpected error in get_estimate")
            return _error(CALCULATION_ERROR_MESSAGE, ErrorCode.CALCULATION_ERROR)

        logger.info(f"[{request_id}] Delivery estimate completed: {estimate.delivery_date}")

        return {
            "success": True,
            "zipCode": zip_code,
            "shippingMethodId": shipping_method_id or "standard",
            "transitDays": estimate.transit_days,
            "deliveryDate": estimate.formatted_date,
            "deliveryDateFull": estimate.formatted_date_full,
            "displayMessage": estimate.display_message
        }

    def get_all_estimates(zip_code: str) -> dict:
        """
        Estimate delivery dates for every shipping method offered at checkout.

        Returns:
            Dictionary with one estimate per shipping method or error information
        """
        request_id = f"{int(time.time() * 1000)}"
        logger.info(f"[{request_id}] All-methods estimate request: zip={zip_code}")

        if not InputValidator.is_valid_zip_code(zip_code):
            logger.warning(f"[{request_id}] Invalid ZIP code: {zip_code!r}")
            return _invalid_zip()

        try:
            estimates = calculator.estimates_for_all_methods(zip_code, clock())
        except Exception:
            logger.exception(f"[{request_id}] Unexpected error in get_all_estimates")
            return _error(CALCULATION_ERROR_MESSAGE_ALL, ErrorCode.CALCULATION_ERROR)

        return {
            "success": True,
            "zipCode": zip_code,
            "shippingMethods": [method_estimate.to_dict() for method_estimate in estimates]
        }

    def list_shipping_methods() -> dict:
        """
        List shipping methods and the cutoff rule

        Returns:
            Dictionary with the shipping method catalog
        """
        return {
            "success": True,
            "cutoffHour": calculator.resolver.cutoff_hour,
            "timezone": config["timezone"],
            "originZip": config["origin_zip"],
            "shippingMethods": [
                {"shippingMethodId": m.id, "shippingMethodName": m.name, "price": m.price}
                for m in calculator.shipping_methods
            ]
        }

    def health_check() -> dict:
        """
        Health check endpoint for monitoring

        Returns:
            Dictionary with service health status
        """
        try:
            now = clock()
            origin_hour = calculator.resolver.hour_provider(now)
            ship_date = calculator.resolver.ship_date(now)

            return {
                "status": "healthy",
                "timestamp": datetime.now(pytz.UTC).isoformat(),
                "checks": {
                    "configuration": "ok",
                    "time_service": "ok"
                },
                "originHour": origin_hour,
                "shipDate": ship_date.isoformat()
            }
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "timestamp": datetime.now(pytz.UTC).isoformat(),
                "error": str(e)
            }

    tools = {
        "get_estimate": get_estimate,
        "get_all_estimates": get_all_estimates,
        "list_shipping_methods": list_shipping_methods,
        "health_check": health_check,
    }
    for tool in tools.values():
        mcp.tool()(tool)

    return tools
