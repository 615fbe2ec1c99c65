"""
Domain-specific exceptions for the tickets app.

These exceptions represent allocation rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class TicketServiceError(Exception):
    """Base exception for all ticket service errors."""
    pass


class InvalidCodeFormatError(TicketServiceError):
    """Raised when a code is not exactly 10 characters from [A-Z0-9]."""
    pass


class NotAvailableError(TicketServiceError):
    """Raised when a known code is currently held by someone."""
    pass


class UnknownCodeError(TicketServiceError):
    """Raised when a code was never imported."""
    pass


class NoTicketsAvailableError(TicketServiceError):
    """Raised when every preferred pool is exhausted."""
    pass
