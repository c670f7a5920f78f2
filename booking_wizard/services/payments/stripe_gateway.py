"""
Stripe Checkout gateway.
"""

import json
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from ...core.enums import PaymentStatus
from ...core.exceptions import GatewayError
from ...core.models.payment import CheckoutSession, WebhookEvent
from .base import PaymentGateway, reject_webhook
from .signatures import compute_hmac_sha256, constant_time_compare, verify_timestamp
from ...utils.logging import get_logger

logger = get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Hosted checkout through Stripe Checkout Sessions."""

    name = "stripe"

    async def create_checkout(
        self,
        amount_minor_units: int,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Mapping[str, str],
    ) -> CheckoutSession:
        # Stripe takes form-encoded bodies with bracketed keys
        form: Dict[str, Any] = {
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "customer_email": customer_email,
            "line_items[0][quantity]": "1",
            "line_items[0][price_data][currency]": currency.lower(),
            "line_items[0][price_data][unit_amount]": str(amount_minor_units),
            "line_items[0][price_data][product_data][name]": metadata.get("description")
            or metadata.get("service", "Booking"),
        }
        for key, value in metadata.items():
            form[f"metadata[{key}]"] = value
            form[f"payment_intent_data[metadata][{key}]"] = value

        result = await self._request("POST", "/v1/checkout/sessions", data=form)

        session_id = result.get("id")
        checkout_url = result.get("url")
        if not session_id or not checkout_url:
            raise GatewayError("stripe response is missing the session id or URL")

        logger.info("Created Stripe checkout session %s", session_id)
        return CheckoutSession(checkout_url=checkout_url, payment_id=str(session_id))

    async def retrieve_status(self, payment_id: str) -> PaymentStatus:
        result = await self._request("GET", f"/v1/checkout/sessions/{payment_id}")

        payment_status = str(result.get("payment_status") or "").lower()
        if payment_status in ("paid", "no_payment_required"):
            return PaymentStatus.SUCCEEDED
        if str(result.get("status") or "").lower() == "expired":
            return PaymentStatus.CANCELLED
        return PaymentStatus.PENDING

    def parse_webhook(self, raw_body: bytes) -> WebhookEvent:
        """Unwrap Stripe's ``data.object`` envelope into a WebhookEvent."""
        try:
            payload = json.loads(raw_body)
            obj = payload["data"]["object"]
            return WebhookEvent.model_validate(
                {
                    "type": payload["type"],
                    "data": {
                        "id": obj["id"],
                        "status": obj.get("payment_status") or obj.get("status"),
                        "metadata": obj.get("metadata") or {},
                        "amount": obj.get("amount_total"),
                        "currency": obj.get("currency"),
                    },
                }
            )
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise ValueError(f"Malformed webhook body: {e}") from e

    def verify_webhook(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        """Verify the ``Stripe-Signature: t=...,v1=...`` header."""
        secret = self._require_secret()
        headers = {k.lower(): v for k, v in headers.items()}

        header = headers.get("stripe-signature")
        if not header:
            reject_webhook("Missing Stripe-Signature header")

        timestamp = None
        signatures = []
        for part in header.split(","):
            key, _, value = part.strip().partition("=")
            if key == "t":
                timestamp = value
            elif key == "v1":
                signatures.append(value)

        if not timestamp or not signatures:
            reject_webhook("Malformed Stripe-Signature header")

        if not verify_timestamp(timestamp):
            reject_webhook("Webhook timestamp expired or invalid")

        expected = compute_hmac_sha256(secret, timestamp.encode("utf-8") + b"." + raw_body)
        if not any(constant_time_compare(expected, sig) for sig in signatures):
            reject_webhook("Invalid Stripe signature")
