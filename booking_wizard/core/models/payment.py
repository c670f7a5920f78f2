"""
Payment-related data models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..enums import BookingStatus
from .booking import BookingRecordPayload


@dataclass
class CheckoutSession:
    """Hosted checkout created by the gateway."""

    checkout_url: str
    payment_id: str


@dataclass
class StoredBooking:
    """Booking row as persisted by the booking repository."""

    id: str
    service: str
    service_details: Dict[str, Any]
    contact_info: Dict[str, Any]
    files: list
    amount_minor_units: int
    currency: str
    status: BookingStatus = BookingStatus.PENDING
    gateway: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    checkout_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def amount(self) -> float:
        """Amount in major currency units."""
        return self.amount_minor_units / 100


class WebhookPaymentData(BaseModel):
    """Payment object carried inside a webhook envelope."""

    model_config = ConfigDict(extra="ignore")

    id: str
    status: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    amount: Optional[int] = None
    currency: Optional[str] = None


class WebhookEvent(BaseModel):
    """Gateway webhook envelope."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(validation_alias=AliasChoices("type", "event_type"))
    data: WebhookPaymentData


class CreatePaymentRequest(BaseModel):
    """Body of the create-payment route."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = None
    booking: Optional[BookingRecordPayload] = None
    currency: Optional[str] = None


class VerifyPaymentRequest(BaseModel):
    """Body of the verify-payment route."""

    booking_id: str


class MessageHandoffRequest(BaseModel):
    """Body of the message-handoff route."""

    session_id: Optional[str] = None
    booking: Optional[BookingRecordPayload] = None
