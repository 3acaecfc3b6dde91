"""
validators.py - Input Validation and Sanitization
"""

import logging
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")  # ASCII digits only


class InputValidator:
    """Validates and sanitizes user inputs"""

    ZIP_CODE_LENGTH = 5
    INVALID_ZIP_MESSAGE = "Invalid ZIP code. Please enter a valid 5-digit US ZIP code."

    @staticmethod
    def is_valid_zip_code(zip_code) -> bool:
        """
        Check for a 5-digit US ZIP code

        Punctuation and spaces are ignored, so "123-45" and "12 345"
        are accepted as 12345.

        Args:
            zip_code: Raw ZIP code input

        Returns:
            True if exactly five digits remain after stripping non-digits
        """
        if not zip_code or not isinstance(zip_code, str):
            return False
        return len(_NON_DIGITS.sub("", zip_code)) == InputValidator.ZIP_CODE_LENGTH

    @staticmethod
    def validate_zip_code(zip_code) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Validate and normalize a ZIP code

        Args:
            zip_code: Raw ZIP code input

        Returns:
            Tuple of (is_valid, normalized_value, error_message)
        """
        if not InputValidator.is_valid_zip_code(zip_code):
            return False, None, InputValidator.INVALID_ZIP_MESSAGE

        normalized = _NON_DIGITS.sub("", zip_code)
        logger.debug(f"ZIP code validated: '{zip_code}' -> '{normalized}'")
        return True, normalized, None
