"""
models.py - Data Models and Enums
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ErrorCode(Enum):
    """Error codes for API responses"""
    INVALID_ZIP = "INVALID_ZIP"
    CALCULATION_ERROR = "CALCULATION_ERROR"


@dataclass(frozen=True)
class ShippingMethod:
    """Shipping method offered at checkout"""
    id: str
    name: str
    price: float


@dataclass(frozen=True)
class DeliveryEstimate:
    """Delivery estimation result"""
    ship_date: date
    delivery_date: date
    transit_days: int
    formatted_date: str
    formatted_date_full: str
    display_message: str

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "shipDate": self.ship_date.isoformat(),
            "deliveryDateISO": self.delivery_date.isoformat(),
            "transitDays": self.transit_days,
            "deliveryDate": self.formatted_date,
            "deliveryDateFull": self.formatted_date_full,
            "displayMessage": self.display_message
        }


@dataclass(frozen=True)
class MethodEstimate:
    """Delivery estimate for one shipping method"""
    method: ShippingMethod
    estimate: DeliveryEstimate

    @property
    def transit_days(self) -> int:
        return self.estimate.transit_days

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "shippingMethodId": self.method.id,
            "shippingMethodName": self.method.name,
            "price": self.method.price,
            "transitDays": self.estimate.transit_days,
            "deliveryDate": self.estimate.formatted_date,
            "displayMessage": self.estimate.display_message
        }
