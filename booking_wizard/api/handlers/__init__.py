"""
HTTP route handlers.
"""

from .health import HealthHandler
from .payments import PaymentsHandler
from .wizard import WizardHandler

__all__ = [
    "HealthHandler",
    "PaymentsHandler",
    "WizardHandler",
]
