"""
Persistence-related exceptions.
"""


class PersistenceError(Exception):
    """Exception raised when a booking or wizard state read/write fails."""
    pass


class BookingNotFoundError(PersistenceError):
    """Exception raised when no stored booking matches a lookup."""
    pass
