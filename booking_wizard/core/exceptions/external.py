"""
External API-related exceptions.
"""

from typing import Optional


class ExternalAPIError(Exception):
    """Base exception for external API errors."""
    pass


class GatewayError(ExternalAPIError):
    """Exception raised when a payment gateway call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WebhookSignatureError(ExternalAPIError):
    """Exception raised when webhook signature verification fails."""
    pass
