"""
Utility modules for the booking wizard.
"""

from .phone import PhoneNumberParser
from .text import TextProcessor
from .validation import ValidationUtils

__all__ = [
    "PhoneNumberParser",
    "TextProcessor",
    "ValidationUtils",
]
