"""
Core data models for the booking wizard.
"""

from .booking import (
    BookingRecord,
    BookingRecordPayload,
    ContactInfo,
    ContactInfoUpdate,
    ServiceDetailsUpdate,
    ServiceSelection,
    StepDefinition,
    StepJump,
    UploadedFile,
    UploadedFilePayload,
)
from .payment import (
    CheckoutSession,
    CreatePaymentRequest,
    MessageHandoffRequest,
    StoredBooking,
    VerifyPaymentRequest,
    WebhookEvent,
    WebhookPaymentData,
)

__all__ = [
    "BookingRecord",
    "BookingRecordPayload",
    "ContactInfo",
    "ContactInfoUpdate",
    "ServiceDetailsUpdate",
    "ServiceSelection",
    "StepDefinition",
    "StepJump",
    "UploadedFile",
    "UploadedFilePayload",
    "CheckoutSession",
    "CreatePaymentRequest",
    "MessageHandoffRequest",
    "StoredBooking",
    "VerifyPaymentRequest",
    "WebhookEvent",
    "WebhookPaymentData",
]
