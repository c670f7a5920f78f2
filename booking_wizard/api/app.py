"""
FastAPI application factory and configuration.
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ..config import GatewayConfig, Settings, get_settings
from ..services.booking import BookingService, FileIntake, ServiceDataProvider
from ..services.payments import PaymentGateway, build_gateway
from ..services.storage import BookingRepository, StateManager
from ..utils.event_log import set_log_path
from ..utils.logging import configure_logging
from .errors import register_exception_handlers
from .handlers import HealthHandler, PaymentsHandler, WizardHandler
from .middleware import LoggingMiddleware, SecurityHeaders
from .webhooks import PaymentWebhook


def create_app(
    settings: Optional[Settings] = None,
    *,
    gateway: Optional[PaymentGateway] = None,
    state_manager: Optional[StateManager] = None,
    repository: Optional[BookingRepository] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    set_log_path(settings.event_log_path)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-step service booking wizard with hosted payments",
        version=settings.app_version,
        debug=settings.debug,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # Initialize services
    gateway = gateway or build_gateway(GatewayConfig.from_settings(settings))
    state_manager = state_manager or StateManager(settings.state_db_path)
    repository = repository or BookingRepository(settings.bookings_db_path)
    service_data = ServiceDataProvider()
    file_intake = FileIntake(settings.upload_dir)
    booking_service = BookingService(gateway, repository, service_data, settings)

    # Initialize handlers
    health_handler = HealthHandler(settings)
    wizard_handler = WizardHandler(settings, state_manager, service_data, file_intake)
    payments_handler = PaymentsHandler(booking_service, state_manager)
    payment_webhook = PaymentWebhook(gateway, booking_service)

    # Register routes
    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(wizard_handler.router, prefix="/wizard/sessions", tags=["wizard"])
    app.include_router(payments_handler.router, prefix="/api", tags=["payments"])
    app.include_router(payment_webhook.router, prefix="/api", tags=["webhooks"])

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    app.state.settings = settings
    app.state.booking_service = booking_service
    app.state.repository = repository
    app.state.state_manager = state_manager

    return app
