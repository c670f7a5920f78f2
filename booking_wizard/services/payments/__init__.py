"""
Payment gateways module.
"""

from typing import Optional

import httpx

from ...config.external_apis import GatewayConfig
from .base import PaymentGateway
from .dodo import DodoGateway
from .stripe_gateway import StripeGateway


def build_gateway(
    config: GatewayConfig, transport: Optional[httpx.AsyncBaseTransport] = None
) -> PaymentGateway:
    """Instantiate the gateway named by ``config.provider``."""
    if config.provider == "stripe":
        return StripeGateway(config, transport=transport)
    return DodoGateway(config, transport=transport)


__all__ = [
    "PaymentGateway",
    "DodoGateway",
    "StripeGateway",
    "build_gateway",
]
