"""
Booking-related exceptions.
"""

from typing import Dict, Optional


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class FileRejectedError(BookingFlowError):
    """Exception raised when none of the uploaded files can be accepted."""
    pass


class SessionNotFoundError(BookingFlowError):
    """Exception raised when a wizard session does not exist."""
    pass
