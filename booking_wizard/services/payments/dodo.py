"""
DODO Payments gateway.
"""

from typing import Any, Dict, Mapping

from ...core.enums import PaymentStatus
from ...core.exceptions import GatewayError
from ...core.models.payment import CheckoutSession
from .base import PaymentGateway, reject_webhook
from .signatures import (
    compute_hmac_sha256,
    compute_hmac_sha256_base64,
    constant_time_compare,
    standard_webhooks_key,
    verify_timestamp,
)
from ...utils.logging import get_logger

logger = get_logger(__name__)

_STATUS_MAP = {
    "succeeded": PaymentStatus.SUCCEEDED,
    "completed": PaymentStatus.SUCCEEDED,
    "paid": PaymentStatus.SUCCEEDED,
    "failed": PaymentStatus.FAILED,
    "cancelled": PaymentStatus.CANCELLED,
    "canceled": PaymentStatus.CANCELLED,
    "expired": PaymentStatus.CANCELLED,
}


class DodoGateway(PaymentGateway):
    """Hosted checkout through the DODO Payments API."""

    name = "dodo"

    async def create_checkout(
        self,
        amount_minor_units: int,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Mapping[str, str],
    ) -> CheckoutSession:
        body: Dict[str, Any] = {
            "amount": amount_minor_units,
            "currency": currency,
            "description": metadata.get("description") or metadata.get("service", ""),
            "customer_email": customer_email,
            "return_url": success_url,
            "cancel_url": cancel_url,
            "metadata": dict(metadata),
        }
        result = await self._request("POST", "/v1/payments", json_body=body)

        payment_id = result.get("id") or result.get("payment_id")
        checkout_url = result.get("checkout_url") or result.get("payment_link")
        if not payment_id or not checkout_url:
            raise GatewayError("dodo response is missing the payment id or checkout URL")

        logger.info("Created DODO payment %s", payment_id)
        return CheckoutSession(checkout_url=checkout_url, payment_id=str(payment_id))

    async def retrieve_status(self, payment_id: str) -> PaymentStatus:
        result = await self._request("GET", f"/v1/payments/{payment_id}")
        raw = str(result.get("status") or "").lower()
        return _STATUS_MAP.get(raw, PaymentStatus.PENDING)

    def verify_webhook(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        """Accept either the ``x-dodo-signature`` header or Standard Webhooks headers."""
        secret = self._require_secret()
        headers = {k.lower(): v for k, v in headers.items()}

        signature = headers.get("x-dodo-signature")
        if signature:
            if signature.startswith("sha256="):
                expected = compute_hmac_sha256(secret, raw_body)
                if constant_time_compare(expected, signature[len("sha256="):]):
                    return
            elif constant_time_compare(signature, secret):
                return
            reject_webhook("Invalid x-dodo-signature")

        webhook_id = headers.get("webhook-id")
        timestamp = headers.get("webhook-timestamp")
        signature_header = headers.get("webhook-signature")
        if not (webhook_id and timestamp and signature_header):
            reject_webhook("Missing webhook signature headers")

        if not verify_timestamp(timestamp):
            reject_webhook("Webhook timestamp expired or invalid")

        signed = b".".join([webhook_id.encode("utf-8"), timestamp.encode("utf-8"), raw_body])
        expected = compute_hmac_sha256_base64(standard_webhooks_key(secret), signed)

        # The header may carry several space-separated "v1,<sig>" entries
        for entry in signature_header.split():
            version, _, received = entry.partition(",")
            if version == "v1" and constant_time_compare(expected, received):
                return

        reject_webhook("Invalid webhook-signature")
