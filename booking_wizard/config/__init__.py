"""
Configuration management for the booking wizard.
"""

from .settings import Settings, get_settings
from .external_apis import GatewayConfig

__all__ = [
    "Settings",
    "get_settings",
    "GatewayConfig",
]
