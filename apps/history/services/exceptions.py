"""Domain-specific exceptions for history services."""


class HistoryServiceError(Exception):
    """Base exception for history services."""
    pass


class InvalidHistoryTypeError(HistoryServiceError):
    """Raised when an entry type is not generated, submitted or cleared."""
    pass
