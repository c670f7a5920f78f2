"""
Storage module: wizard state and submitted bookings.
"""

from .repository import BookingRepository
from .state_manager import StateManager, storage_key

__all__ = [
    "BookingRepository",
    "StateManager",
    "storage_key",
]
