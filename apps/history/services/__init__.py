"""History app services layer."""

from .exceptions import HistoryServiceError, InvalidHistoryTypeError
from .history_log import record_entry, list_entries, clamp_limit

__all__ = [
    # Exceptions
    'HistoryServiceError',
    'InvalidHistoryTypeError',
    # Services
    'record_entry',
    'list_entries',
    'clamp_limit',
]
