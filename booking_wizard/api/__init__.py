"""
API layer for the booking wizard.
"""

from .app import create_app
from .middleware import SecurityHeaders, LoggingMiddleware

__all__ = [
    "create_app",
    "SecurityHeaders",
    "LoggingMiddleware",
]
