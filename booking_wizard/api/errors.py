"""
Exception handlers turning domain errors into JSON responses.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    BookingFlowError,
    BookingNotFoundError,
    GatewayError,
    PersistenceError,
    SessionNotFoundError,
    WebhookSignatureError,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    """JSON error body shared by every route."""
    body: Dict[str, Any] = {"error": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


async def booking_flow_error_handler(request: Request, exc: BookingFlowError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(str(exc), errors=exc.errors or None),
    )


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(str(exc)))


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("Gateway error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_body(str(exc)),
    )


async def webhook_signature_handler(request: Request, exc: WebhookSignatureError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=error_body("Invalid webhook signature"),
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Failed to store booking data"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the domain exception handlers on the application."""
    app.add_exception_handler(BookingFlowError, booking_flow_error_handler)
    app.add_exception_handler(SessionNotFoundError, not_found_handler)
    app.add_exception_handler(BookingNotFoundError, not_found_handler)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(WebhookSignatureError, webhook_signature_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
