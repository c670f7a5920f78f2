"""
Webhook handlers.
"""

from .payments import PaymentWebhook

__all__ = [
    "PaymentWebhook",
]
