"""
Booking service module.
"""

from .data import FILE_UPLOAD_SERVICES, PriceQuote, ServiceDataProvider, requires_file_upload
from .files import FileIntake, IncomingFile, IntakeResult
from .service import BookingService, MessageHandoff, PaymentResult
from .step_controller import StepController, compute_steps

__all__ = [
    "FILE_UPLOAD_SERVICES",
    "PriceQuote",
    "ServiceDataProvider",
    "requires_file_upload",
    "FileIntake",
    "IncomingFile",
    "IntakeResult",
    "BookingService",
    "MessageHandoff",
    "PaymentResult",
    "StepController",
    "compute_steps",
]
