"""
Payment gateway contract and shared HTTP plumbing.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import ValidationError

from ...config.external_apis import GatewayConfig
from ...core.enums import PaymentStatus
from ...core.exceptions import GatewayError, WebhookSignatureError
from ...core.models.payment import CheckoutSession, WebhookEvent
from ...utils.logging import get_logger

logger = get_logger(__name__)


class PaymentGateway(ABC):
    """Third-party payment gateway used to take booking payments."""

    name = "gateway"

    def __init__(self, config: GatewayConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.timeout = config.timeout
        self._transport = transport

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.config.api_key}"}

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make one HTTP call to the gateway, converting failures to GatewayError."""
        if not self.config.is_configured():
            raise GatewayError(f"{self.name} gateway is not configured")

        url = f"{self.config.api_base.rstrip('/')}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json_body,
                    data=data,
                    headers=self._auth_headers(),
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException:
            logger.error("%s request timed out: %s %s", self.name, method, path)
            raise GatewayError(f"{self.name} request timed out")
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s returned HTTP %s for %s %s", self.name, e.response.status_code, method, path
            )
            raise GatewayError(
                f"{self.name} HTTP error {e.response.status_code}",
                status_code=e.response.status_code,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("%s request failed: %s", self.name, e)
            raise GatewayError(f"{self.name} request failed: {str(e)}")

    def parse_webhook(self, raw_body: bytes) -> WebhookEvent:
        """Parse a webhook body into a WebhookEvent."""
        try:
            return WebhookEvent.model_validate(json.loads(raw_body))
        except (ValueError, ValidationError) as e:
            raise ValueError(f"Malformed webhook body: {e}") from e

    def _require_secret(self) -> str:
        if not self.config.has_webhook_secret():
            raise GatewayError(f"{self.name} webhook secret is not configured")
        return self.config.webhook_secret or ""

    @abstractmethod
    async def create_checkout(
        self,
        amount_minor_units: int,
        currency: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Mapping[str, str],
    ) -> CheckoutSession:
        """Create a hosted checkout."""

    @abstractmethod
    async def retrieve_status(self, payment_id: str) -> PaymentStatus:
        """Look up the current status of a payment."""

    @abstractmethod
    def verify_webhook(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        """Raise WebhookSignatureError unless the delivery is authentic."""


def reject_webhook(message: str) -> None:
    """Log and raise a WebhookSignatureError."""
    logger.warning("Webhook rejected: %s", message)
    raise WebhookSignatureError(message)
