"""
Payment gateway webhook handler.
"""


from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ...core.exceptions import WebhookSignatureError
from ...services.booking import BookingService
from ...services.payments import PaymentGateway
from ...utils.event_log import log_event
from ..errors import error_body
from ...utils.logging import get_logger

logger = get_logger(__name__)


class PaymentWebhook:
    """Handler for payment status webhooks sent by the gateway."""

    def __init__(self, gateway: PaymentGateway, booking_service: BookingService):
        self.gateway = gateway
        self.booking_service = booking_service
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup webhook routes."""

        @self.router.post("/webhook")
        async def receive_payment_event(request: Request):
            """Verify, parse and apply a gateway event."""
            # Signatures cover the exact bytes, so read the body before parsing
            raw_body = await request.body()

            try:
                self.gateway.verify_webhook(raw_body, request.headers)
            except WebhookSignatureError:
                log_event("webhook_rejected", {"gateway": self.gateway.name})
                raise

            try:
                event = self.gateway.parse_webhook(raw_body)
            except ValueError as e:
                logger.warning("Malformed webhook body: %s", e)
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=error_body("Malformed webhook body"),
                )

            logger.info("Webhook %s for payment %s", event.type, event.data.id)
            booking = await self.booking_service.handle_webhook_event(event)
            return {"received": True, "booking_id": booking.id, "status": booking.status.value}
