"""
Booking service for submitting completed wizards.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

from ...config import Settings
from ...core.enums import BookingStatus, ServiceType
from ...core.exceptions import BookingFlowError, BookingNotFoundError, GatewayError
from ...core.models.booking import BookingRecord
from ...core.models.payment import StoredBooking, WebhookEvent
from ...utils.event_log import log_event
from ...utils.phone import PhoneNumberParser
from ...utils.text import TextProcessor
from ..payments import PaymentGateway
from ..storage import BookingRepository
from .data import ServiceDataProvider
from .requirements import known_fields
from .step_controller import StepController
from ...utils.logging import get_logger

logger = get_logger(__name__)

_EVENT_STATUS: Dict[str, BookingStatus] = {
    "payment.succeeded": BookingStatus.PAID,
    "payment.completed": BookingStatus.PAID,
    "checkout.session.completed": BookingStatus.PAID,
    "payment.failed": BookingStatus.FAILED,
    "payment.cancelled": BookingStatus.CANCELLED,
    "checkout.session.expired": BookingStatus.CANCELLED,
    "payment.pending": BookingStatus.PENDING,
}

_RAW_STATUS: Dict[str, BookingStatus] = {
    "succeeded": BookingStatus.PAID,
    "completed": BookingStatus.PAID,
    "paid": BookingStatus.PAID,
    "failed": BookingStatus.FAILED,
    "cancelled": BookingStatus.CANCELLED,
    "canceled": BookingStatus.CANCELLED,
    "expired": BookingStatus.CANCELLED,
    "pending": BookingStatus.PENDING,
}


def status_for_event(event: WebhookEvent) -> Optional[BookingStatus]:
    """Map a webhook event onto a booking status, or None if it says nothing."""
    status = _EVENT_STATUS.get(event.type)
    if status is not None:
        return status
    return _RAW_STATUS.get(str(event.data.status or "").lower())


@dataclass
class PaymentResult:
    """Checkout created for a booking."""

    booking_id: str
    payment_id: str
    checkout_url: str
    amount: float
    currency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "booking_id": self.booking_id,
            "payment_id": self.payment_id,
            "checkout_url": self.checkout_url,
            "amount": self.amount,
            "currency": self.currency,
        }


@dataclass
class MessageHandoff:
    """Pre-filled WhatsApp message for bookings completed over chat."""

    url: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "message": self.message}


class BookingService:
    """Service for submitting bookings and tracking their payment."""

    def __init__(
        self,
        gateway: PaymentGateway,
        repository: BookingRepository,
        service_data: ServiceDataProvider,
        settings: Settings,
    ):
        self.gateway = gateway
        self.repository = repository
        self.service_data = service_data
        self.settings = settings

    def _require_complete(self, record: BookingRecord) -> None:
        if not ServiceType.is_known(record.service):
            raise BookingFlowError(
                "Booking is incomplete", {"service": "Please select a valid service"}
            )

        allowed = known_fields(record.service)
        unknown = sorted(name for name in record.service_details if name not in allowed)
        if unknown:
            raise BookingFlowError(
                f"Unknown fields for {record.service}: {', '.join(unknown)}",
                {name: "Unknown field" for name in unknown},
            )

        controller = StepController(record)
        if controller.is_complete():
            return
        errors: Dict[str, str] = {}
        for step in controller.steps[:-1]:
            errors.update(controller.validate_step(step.id))
        raise BookingFlowError("Booking is incomplete", errors)

    async def create_payment(
        self, record: BookingRecord, currency: Optional[str] = None
    ) -> PaymentResult:
        """Persist a pending booking and open a hosted checkout for it."""
        self._require_complete(record)

        quote_ = self.service_data.quote(record)
        if quote_ is None:
            raise BookingFlowError(
                "No price is available for this booking",
                {"serviceDetails": "No price matches the selected options"},
            )

        currency = currency or self.settings.currency
        booking = await self.repository.create_booking(record, quote_.amount_minor_units, currency)

        base = self.settings.public_url.rstrip("/")
        success_url = f"{base}/payment/success?booking={booking.id}"
        cancel_url = f"{base}/payment/cancel?booking={booking.id}"
        metadata = {
            "booking_id": booking.id,
            "service": record.service,
            "description": f"{self.service_data.display_name(record.service)} - {record.contact_info.name}",
        }

        try:
            checkout = await self.gateway.create_checkout(
                amount_minor_units=quote_.amount_minor_units,
                currency=currency,
                customer_email=record.contact_info.email,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
            )
        except GatewayError as e:
            logger.error("Checkout creation failed for booking %s: %s", booking.id, e)
            await self.repository.log_payment_event(
                booking.id,
                "payment_creation_failed",
                {"error": str(e), "status": e.status_code},
            )
            log_event("payment_creation_failed", {"booking_id": booking.id, "error": str(e)})
            raise

        await self.repository.attach_payment(
            booking.id, self.gateway.name, checkout.payment_id, checkout.checkout_url
        )
        await self.repository.log_payment_event(
            booking.id,
            "payment_created",
            {"payment_id": checkout.payment_id, "checkout_url": checkout.checkout_url},
        )
        log_event(
            "payment_created",
            {"booking_id": booking.id, "payment_id": checkout.payment_id, "amount": quote_.price},
        )

        return PaymentResult(
            booking_id=booking.id,
            payment_id=checkout.payment_id,
            checkout_url=checkout.checkout_url,
            amount=quote_.price,
            currency=currency,
        )

    async def verify_payment(self, booking_id: str) -> StoredBooking:
        """Ask the gateway for the payment status and sync the booking."""
        booking = await self.repository.get_booking(booking_id)
        if not booking.gateway_payment_id:
            return booking

        payment_status = await self.gateway.retrieve_status(booking.gateway_payment_id)
        new_status = payment_status.to_booking_status()

        if new_status != booking.status:
            await self.repository.update_status(booking.id, new_status)
            booking.status = new_status

        await self.repository.log_payment_event(
            booking.id,
            "status_verified",
            {"payment_status": payment_status.value, "booking_status": new_status.value},
        )
        return booking

    async def handle_webhook_event(self, event: WebhookEvent) -> StoredBooking:
        """Apply a verified gateway webhook to its booking."""
        booking = await self.repository.find_by_payment_id(event.data.id)
        if booking is None:
            booking_id = event.data.metadata.get("booking_id")
            if not booking_id:
                raise BookingNotFoundError(f"No booking for payment {event.data.id}")
            booking = await self.repository.get_booking(str(booking_id))

        await self.repository.log_payment_event(
            booking.id, event.type, event.data.model_dump()
        )
        log_event("webhook_received", {"booking_id": booking.id, "type": event.type})

        new_status = status_for_event(event)
        if new_status is not None and new_status != booking.status:
            await self.repository.update_status(booking.id, new_status)
            booking.status = new_status
        else:
            logger.info("Webhook %s left booking %s unchanged", event.type, booking.id)

        return booking

    def build_summary(self, record: BookingRecord) -> str:
        """Human-readable booking summary used in the chat handoff."""
        lines = [f"New booking request: {self.service_data.display_name(record.service)}"]

        if record.service_details:
            lines.append("")
            lines.append("Details:")
            for name, value in record.service_details.items():
                lines.append(f"- {TextProcessor.humanize_field_name(name)}: {value}")

        if record.files:
            lines.append("")
            lines.append("Files:")
            for uploaded in record.files:
                lines.append(
                    f"- {uploaded.name} ({TextProcessor.format_file_size(uploaded.size_bytes)})"
                )

        quote_ = self.service_data.quote(record)
        if quote_ is not None:
            lines.append("")
            lines.append(f"Estimated price: {quote_.price} {self.settings.currency}")

        contact = record.contact_info
        lines.append("")
        lines.append("Contact:")
        lines.append(f"- Name: {contact.name}")
        lines.append(f"- Phone: {contact.phone}")
        lines.append(f"- Email: {contact.email}")
        lines.append(f"- Preferred contact: {contact.preferred_contact_channel.value}")
        return "\n".join(lines)

    def build_message_handoff(self, record: BookingRecord) -> MessageHandoff:
        """Build the WhatsApp link that submits the booking without payment."""
        self._require_complete(record)
        message = self.build_summary(record)
        number = PhoneNumberParser.whatsapp_digits(self.settings.business_whatsapp_number)
        url = f"https://wa.me/{number}?text={quote(message, safe='')}"
        log_event("message_handoff", {"service": record.service})
        return MessageHandoff(url=url, message=message)
