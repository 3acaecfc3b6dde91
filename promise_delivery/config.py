"""
config.py - Service Configuration
"""

import logging
import os
from typing import Dict, List, Optional

import pytz
from dotenv import load_dotenv

from promise_delivery.models import ShippingMethod

logger = logging.getLogger(__name__)

DEFAULT_CUTOFF_HOUR = 14  # 2 PM in the origin zone
DEFAULT_ORIGIN_TIMEZONE = "America/New_York"
DEFAULT_ORIGIN_ZIP = "10001"  # NYC fulfillment center
DEFAULT_ZIP_STORE_PATH = os.path.join("~", ".promise_delivery.json")
DEFAULT_LOG_LEVEL = "INFO"

# Fixed catalog, in display order
SHIPPING_METHODS: List[ShippingMethod] = [
    ShippingMethod(id="standard", name="Standard Shipping", price=5.99),
    ShippingMethod(id="express", name="Express Shipping", price=12.99),
    ShippingMethod(id="overnight", name="Overnight", price=24.99),
]


class ConfigCache:
    """
    Process-wide configuration cache

    Values come from environment variables (a local .env file is loaded
    first). Invalid values are logged and replaced with defaults so the
    estimator always has a usable configuration.
    """

    _cache: Optional[Dict] = None

    @classmethod
    def get_config(cls, force_refresh: bool = False) -> Dict:
        """
        Get cached configuration or load it from the environment

        Args:
            force_refresh: If True, bypass cache and re-read the environment

        Returns:
            Configuration dictionary
        """
        if cls._cache is not None and not force_refresh:
            logger.debug("Using cached configuration")
            return cls._cache

        load_dotenv()
        config = cls._validate_config({
            "cutoff_hour": os.getenv("PROMISE_CUTOFF_HOUR", str(DEFAULT_CUTOFF_HOUR)),
            "timezone": os.getenv("PROMISE_ORIGIN_TIMEZONE", DEFAULT_ORIGIN_TIMEZONE),
            "origin_zip": os.getenv("PROMISE_ORIGIN_ZIP", DEFAULT_ORIGIN_ZIP),
            "zip_store_path": os.getenv("PROMISE_ZIP_STORE_PATH", DEFAULT_ZIP_STORE_PATH),
            "log_level": os.getenv("PROMISE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        })

        cls._cache = config
        logger.info(
            f"Configuration loaded: cutoff={config['cutoff_hour']}:00 {config['timezone']}, "
            f"origin={config['origin_zip']}"
        )
        return config

    @classmethod
    def _validate_config(cls, raw: Dict) -> Dict:
        """
        Coerce and validate raw configuration values

        Args:
            raw: Configuration values as read from the environment

        Returns:
            Validated configuration dictionary
        """
        config = dict(raw)

        try:
            cutoff_hour = int(raw["cutoff_hour"])
            if not 0 <= cutoff_hour < 24:
                raise ValueError("Invalid hour value")
            config["cutoff_hour"] = cutoff_hour
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid cutoff hour: {raw['cutoff_hour']} - {str(e)}, using default")
            config["cutoff_hour"] = DEFAULT_CUTOFF_HOUR

        try:
            pytz.timezone(raw["timezone"])
        except pytz.exceptions.UnknownTimeZoneError:
            logger.error(f"Unknown timezone: {raw['timezone']}, using {DEFAULT_ORIGIN_TIMEZONE}")
            config["timezone"] = DEFAULT_ORIGIN_TIMEZONE

        config["zip_store_path"] = os.path.expanduser(raw["zip_store_path"])
        config["log_level"] = str(raw["log_level"]).upper()
        return config

    @classmethod
    def clear_cache(cls):
        """Clear the configuration cache (useful for testing)"""
        cls._cache = None
        logger.info("Configuration cache cleared")
