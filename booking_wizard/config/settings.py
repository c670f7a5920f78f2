"""
Application settings and configuration.
"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "Booking Wizard"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False)
    public_url: str = Field(default="http://localhost:8080")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Storage
    state_db_path: str = Field(default="wizard_state.db")
    bookings_db_path: str = Field(default="bookings.db")
    upload_dir: str = Field(default="uploads")

    # Payments
    payment_gateway: str = Field(default="dodo")
    currency: str = Field(default="MAD")
    gateway_timeout: float = Field(default=10.0)

    dodo_api_key: Optional[str] = Field(default=None)
    dodo_api_base: str = Field(default="https://api.dodopayments.com")
    dodo_webhook_secret: Optional[str] = Field(default=None)

    stripe_secret_key: Optional[str] = Field(default=None)
    stripe_api_base: str = Field(default="https://api.stripe.com")
    stripe_webhook_secret: Optional[str] = Field(default=None)

    # Messaging handoff
    business_whatsapp_number: str = Field(default="212600000000")
    default_phone_country_code: str = Field(default="212")

    # Logging
    log_level: str = Field(default="INFO")
    event_log_path: str = Field(default="booking_event_log.jsonl")


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
