"""
Validation utilities for contact information.
"""

import re
from typing import Dict, Optional, Tuple

from ..core.models.booking import ContactInfo
from .phone import PhoneNumberParser

NAME_PATTERN = re.compile(r"[a-zA-Z ]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class ValidationUtils:
    """Validation utilities for various data types."""

    @staticmethod
    def validate_name(name: str) -> Tuple[bool, Optional[str]]:
        """
        Validate name format.

        Args:
            name: Name to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name or not isinstance(name, str) or not name.strip():
            return False, "Name is required"

        if not NAME_PATTERN.fullmatch(name):
            return False, "Name can only contain letters and spaces"

        return True, None

    @staticmethod
    def validate_phone(phone: str) -> Tuple[bool, Optional[str]]:
        """
        Validate international phone number format.

        Args:
            phone: Phone number to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not phone:
            return False, "Phone number is required"

        if not PhoneNumberParser.is_valid_international_number(phone):
            return False, "Please enter a valid phone number (e.g. +212612345678)"

        return True, None

    @staticmethod
    def validate_email(email: str) -> Tuple[bool, Optional[str]]:
        """
        Validate email address shape.

        Args:
            email: Email address to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not email:
            return False, "Email is required"

        if not EMAIL_PATTERN.fullmatch(email):
            return False, "Please enter a valid email address"

        return True, None

    @staticmethod
    def validate_contact_info(contact: ContactInfo) -> Dict[str, str]:
        """
        Validate all contact fields.

        Args:
            contact: Contact information to validate

        Returns:
            Mapping of field name to error message; empty when valid
        """
        errors: Dict[str, str] = {}

        checks = (
            ("name", ValidationUtils.validate_name(contact.name)),
            ("phone", ValidationUtils.validate_phone(contact.phone)),
            ("email", ValidationUtils.validate_email(contact.email)),
        )
        for field_name, (is_valid, message) in checks:
            if not is_valid and message:
                errors[field_name] = message

        return errors
