"""
Booking-related enums.
"""

from enum import Enum


class ServiceType(str, Enum):
    """Service lines offered by the wizard."""

    WORDPRESS = "wordpress"
    GRAPHIC_DESIGN = "graphic-design"
    VIDEO_EDITING = "video-editing"
    TSHIRT_PRINTING = "tshirt-printing"

    @classmethod
    def is_known(cls, value: str) -> bool:
        """Check whether ``value`` names one of the offered services."""
        return value in {member.value for member in cls}


class StepKind(str, Enum):
    """Enumeration of the wizard screens."""

    SERVICE_SELECTION = "service_selection"
    SERVICE_DETAILS = "service_details"
    FILE_UPLOAD = "file_upload"
    CONTACT_INFO = "contact_info"
    REVIEW = "review"


class ContactChannel(str, Enum):
    """Preferred way for the studio to reach the customer."""

    WHATSAPP = "whatsapp"
    EMAIL = "email"
    PHONE = "phone"

    @classmethod
    def from_string(cls, value: str) -> "ContactChannel":
        """Convert string to ContactChannel, falling back to WhatsApp."""
        if not value or not isinstance(value, str):
            return cls.WHATSAPP

        value = value.strip().lower()
        for member in cls:
            if member.value == value:
                return member
        return cls.WHATSAPP


class BookingStatus(str, Enum):
    """Status of a persisted booking."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Status of a payment as reported by the gateway."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def to_booking_status(self) -> BookingStatus:
        """Map a gateway payment status onto the booking status."""
        return {
            PaymentStatus.PENDING: BookingStatus.PENDING,
            PaymentStatus.SUCCEEDED: BookingStatus.PAID,
            PaymentStatus.FAILED: BookingStatus.FAILED,
            PaymentStatus.CANCELLED: BookingStatus.CANCELLED,
        }[self]
