"""CSV ingestion for ticket imports."""

import re
from typing import List, Tuple

from .codes import canonical_code, is_valid_code, normalize_pool

_SEPARATORS = re.compile(r'[,;\t]')


def parse_ticket_csv(text: str) -> List[Tuple[str, str]]:
    """
    Parse ``code,pool`` lines into (code, pool) pairs.

    Fields may be separated by comma, semicolon or tab. Blank lines and
    rows whose code is malformed (header rows included) are skipped.
    The pool column is optional and normalised with normalize_pool().

    Example::

        >>> parse_ticket_csv("code,pool\\nab12cd34ef,common\\nZZ99YY88XX")
        [('AB12CD34EF', 'Common'), ('ZZ99YY88XX', 'HSV')]
    """
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        parts = [part.strip() for part in _SEPARATORS.split(line)]
        code = canonical_code(parts[0])
        if not is_valid_code(code):
            continue

        pool_raw = parts[1] if len(parts) > 1 else None
        rows.append((code, normalize_pool(pool_raw)))

    return rows
