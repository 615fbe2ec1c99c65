"""
Ek-code format rules.

A code is exactly 10 characters from [A-Z0-9]. Input is accepted in any
case and normalised to upper case before it is checked.
"""

import re
from typing import Optional

from apps.tickets.models import TicketPool

from .exceptions import InvalidCodeFormatError

CODE_PATTERN = re.compile(r'^[A-Z0-9]{10}$')


def canonical_code(raw) -> str:
    """Strip and upper-case a raw value without validating it."""
    if raw is None:
        return ''
    return str(raw).strip().upper()


def is_valid_code(raw) -> bool:
    return bool(CODE_PATTERN.match(canonical_code(raw)))


def normalize_code(raw) -> str:
    """
    Return the canonical form of a code.

    Raises:
        InvalidCodeFormatError: If the value is not a 10-character alphanumeric code
    """
    code = canonical_code(raw)
    if not CODE_PATTERN.match(code):
        raise InvalidCodeFormatError(f"Invalid Ek-code format: {raw!r}")
    return code


def normalize_pool(raw: Optional[str]) -> str:
    """
    Map a free-form pool name onto a TicketPool value.

    COMMON maps to Common and OSV to OSV (case-insensitive); anything
    else, including a missing value, falls back to HSV.
    """
    value = (raw or '').strip().upper()
    if value == 'COMMON':
        return TicketPool.COMMON
    if value == 'OSV':
        return TicketPool.OSV
    return TicketPool.HSV
