"""
Tickets app services layer.

Services contain the allocation rules for Ek-codes. Every transition of a
ticket is a single conditional write against the database.
"""

from .exceptions import (
    TicketServiceError,
    InvalidCodeFormatError,
    NotAvailableError,
    UnknownCodeError,
    NoTicketsAvailableError,
)

from .codes import (
    CODE_PATTERN,
    canonical_code,
    is_valid_code,
    normalize_code,
    normalize_pool,
)

from .csv_import import parse_ticket_csv

from .pool_allocator import (
    AvailableInventory,
    ReturnResult,
    preferred_pools_for,
    import_tickets,
    delete_tickets,
    claim_next,
    claim_ticket,
    return_ticket,
    count_available,
    list_available,
    list_assigned,
)


__all__ = [
    # Exceptions
    'TicketServiceError',
    'InvalidCodeFormatError',
    'NotAvailableError',
    'UnknownCodeError',
    'NoTicketsAvailableError',

    # Code format
    'CODE_PATTERN',
    'canonical_code',
    'is_valid_code',
    'normalize_code',
    'normalize_pool',
    'parse_ticket_csv',

    # Allocation
    'AvailableInventory',
    'ReturnResult',
    'preferred_pools_for',
    'import_tickets',
    'delete_tickets',
    'claim_next',
    'claim_ticket',
    'return_ticket',
    'count_available',
    'list_available',
    'list_assigned',
]
