"""
Enums for the booking wizard.
"""

from .booking import (
    BookingStatus,
    ContactChannel,
    PaymentStatus,
    ServiceType,
    StepKind,
)

__all__ = [
    "BookingStatus",
    "ContactChannel",
    "PaymentStatus",
    "ServiceType",
    "StepKind",
]
