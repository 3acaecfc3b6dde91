"""
storage.py - Shopper-Side Key-Value Store

A small JSON file standing in for browser local storage: the shopper's ZIP
code survives between visits, and checkout records the selected promise date.
"""

import json
import logging
import os
from typing import Dict, Optional

from promise_delivery.config import ConfigCache
from promise_delivery.models import DeliveryEstimate

logger = logging.getLogger(__name__)

ZIP_CODE_KEY = "promiseDeliveryZipCode"
SELECTED_DATE_KEY = "customerSelectedDeliveryDate"
SELECTED_DATE_ISO_KEY = "customerSelectedDeliveryDateISO"


class ZipCodeStore:
    """Key-value store persisted as a JSON object on disk"""

    def __init__(self, path: str):
        self.path = path

    @classmethod
    def from_config(cls) -> "ZipCodeStore":
        """Open the store at the configured PROMISE_ZIP_STORE_PATH"""
        return cls(ConfigCache.get_config()["zip_store_path"])

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {str(e)}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self.path}: expected a JSON object")
            return {}
        return data

    def _write(self, data: Dict[str, str]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_item(self, key: str) -> Optional[str]:
        """Get a stored value, or None if unset"""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str):
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str):
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def get_zip_code(self) -> Optional[str]:
        """
        Get the remembered ZIP code

        Returns:
            Stored ZIP code, or None if none has been saved
        """
        return self.get_item(ZIP_CODE_KEY)

    def save_zip_code(self, zip_code: str):
        self.set_item(ZIP_CODE_KEY, zip_code)
        logger.debug(f"Saved ZIP code {zip_code} to {self.path}")

    def clear_zip_code(self):
        self.remove_item(ZIP_CODE_KEY)

    def remember_selected_delivery(self, estimate: DeliveryEstimate):
        """
        Record the promise date chosen at checkout

        Args:
            estimate: Estimate for the selected shipping method
        """
        data = self._read()
        data[SELECTED_DATE_KEY] = estimate.formatted_date_full
        data[SELECTED_DATE_ISO_KEY] = estimate.delivery_date.isoformat()
        self._write(data)
        logger.info(f"Selected delivery date: {estimate.formatted_date_full}")
