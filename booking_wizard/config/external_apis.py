"""
Payment gateway configuration.
"""

from typing import Optional
from pydantic import BaseModel

from .settings import Settings


class GatewayConfig(BaseModel):
    """Connection settings for the active payment gateway."""

    provider: str = "dodo"
    api_base: str = "https://api.dodopayments.com"
    api_key: Optional[str] = None
    webhook_secret: Optional[str] = None
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayConfig":
        """Build the config for ``settings.payment_gateway``."""
        provider = (settings.payment_gateway or "dodo").strip().lower()
        if provider == "stripe":
            return cls(
                provider="stripe",
                api_base=settings.stripe_api_base,
                api_key=settings.stripe_secret_key,
                webhook_secret=settings.stripe_webhook_secret,
                timeout=settings.gateway_timeout,
            )
        return cls(
            provider="dodo",
            api_base=settings.dodo_api_base,
            api_key=settings.dodo_api_key,
            webhook_secret=settings.dodo_webhook_secret,
            timeout=settings.gateway_timeout,
        )

    def is_configured(self) -> bool:
        """Check if the gateway API key is present."""
        return bool(self.api_key)

    def has_webhook_secret(self) -> bool:
        """Check if webhook deliveries can be verified."""
        return bool(self.webhook_secret)
