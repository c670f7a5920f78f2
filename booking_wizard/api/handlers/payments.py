"""
Payment and submission handler.
"""

from typing import Optional, Tuple

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ...core.exceptions import BookingFlowError, GatewayError, SessionNotFoundError
from ...core.models.booking import BookingRecord, BookingRecordPayload
from ...core.models.payment import (
    CreatePaymentRequest,
    MessageHandoffRequest,
    VerifyPaymentRequest,
)
from ...services.booking import BookingService
from ...services.storage import StateManager
from ...utils.event_log import set_session_id
from ..errors import error_body
from ...utils.logging import get_logger

logger = get_logger(__name__)


class PaymentsHandler:
    """Handler for payment creation, verification and message handoff."""

    def __init__(self, booking_service: BookingService, state_manager: StateManager):
        self.booking_service = booking_service
        self.state_manager = state_manager
        self.router = APIRouter()
        self._setup_routes()

    async def _resolve_record(
        self, session_id: Optional[str], booking: Optional[BookingRecordPayload]
    ) -> Tuple[BookingRecord, Optional[str]]:
        """Return the record to submit, from the session store or the inline body."""
        if session_id:
            set_session_id(session_id)
            state = await self.state_manager.get_state(session_id)
            if state is None:
                raise SessionNotFoundError(f"Wizard session {session_id} not found")
            return state[0], session_id
        if booking is not None:
            return booking.to_record(), None
        raise BookingFlowError("Either session_id or booking is required")

    def _setup_routes(self):
        """Setup payment routes."""

        @self.router.post("/create-payment")
        async def create_payment(body: CreatePaymentRequest):
            """Create a pending booking and a hosted checkout for it."""
            record, session_id = await self._resolve_record(body.session_id, body.booking)
            try:
                result = await self.booking_service.create_payment(record, body.currency)
            except GatewayError as e:
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content=error_body(
                        "Failed to create payment with provider",
                        details=str(e),
                        fallback="message",
                    ),
                )

            if session_id:
                await self.state_manager.clear_state(session_id)
            return result.to_dict()

        @self.router.post("/verify-payment")
        async def verify_payment(body: VerifyPaymentRequest):
            """Sync a booking's status with the gateway."""
            booking = await self.booking_service.verify_payment(body.booking_id)
            return {
                "booking_id": booking.id,
                "status": booking.status.value,
                "amount": booking.amount,
                "currency": booking.currency,
                "service": booking.service,
            }

        @self.router.post("/message-handoff")
        async def message_handoff(body: MessageHandoffRequest):
            """Submit the booking over WhatsApp instead of paying online."""
            record, session_id = await self._resolve_record(body.session_id, body.booking)
            handoff = self.booking_service.build_message_handoff(record)
            if session_id:
                await self.state_manager.clear_state(session_id)
            return handoff.to_dict()
