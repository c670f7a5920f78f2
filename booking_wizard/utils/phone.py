"""
Phone number formatting and validation utilities.
"""

import re
from typing import Optional


class PhoneNumberParser:
    """Phone number helpers for international (E.164-like) numbers."""

    INTERNATIONAL_PATTERN = r"\+[0-9]{10,15}"

    @classmethod
    def format_international(cls, value: str, default_country_code: str = "212") -> str:
        """
        Normalize user input towards ``+<country><number>`` form.

        Args:
            value: Raw phone input as typed by the customer
            default_country_code: Country code prepended to local numbers

        Returns:
            Cleaned phone number; empty input stays empty
        """
        if not value:
            return ""

        # Keep digits and plus signs only
        cleaned = re.sub(r"[^0-9+]", "", value)
        if not cleaned:
            return ""

        if cleaned.startswith("+"):
            return cleaned

        if cleaned.startswith(default_country_code):
            return "+" + cleaned

        # Drop the trunk prefix of local numbers (0612... -> +212612...)
        return "+" + default_country_code + re.sub(r"^0", "", cleaned)

    @classmethod
    def is_valid_international_number(cls, phone: Optional[str]) -> bool:
        """
        Check if phone number is ``+`` followed by 10 to 15 digits.

        Args:
            phone: Phone number to validate

        Returns:
            True if valid, False otherwise
        """
        if not phone or not isinstance(phone, str):
            return False
        return re.fullmatch(cls.INTERNATIONAL_PATTERN, phone) is not None

    @classmethod
    def whatsapp_digits(cls, phone: str) -> str:
        """Digits-only form used in ``wa.me`` links."""
        return re.sub(r"[^0-9]", "", phone or "")
