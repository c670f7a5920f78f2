"""
Custom exceptions for the booking wizard.
"""

from .booking import BookingFlowError, FileRejectedError, SessionNotFoundError
from .external import ExternalAPIError, GatewayError, WebhookSignatureError
from .persistence import BookingNotFoundError, PersistenceError

__all__ = [
    "BookingFlowError",
    "FileRejectedError",
    "SessionNotFoundError",
    "ExternalAPIError",
    "GatewayError",
    "WebhookSignatureError",
    "PersistenceError",
    "BookingNotFoundError",
]
