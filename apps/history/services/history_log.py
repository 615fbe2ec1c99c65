"""
History log service.

Entries are append-only: they are created by the ticket allocator after
each state transition and by clients reporting activity, and are never
updated afterwards.
"""

import logging
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from django.conf import settings
from django.db.models import QuerySet

from apps.history.models import HistoryEntry, HistoryType

from .exceptions import InvalidHistoryTypeError

logger = logging.getLogger(__name__)


def record_entry(
    *,
    entry_type: str,
    code: str,
    user=None,
    team_member: str = '',
    country: str = '',
    comments: str = '',
    clearance_id: str = '',
    date: Optional[datetime] = None
) -> HistoryEntry:
    """
    Append a history entry.

    Args:
        entry_type: One of generated, submitted, cleared
        code: Ek-code the entry refers to (stored upper-case)
        user: Optional acting User
        team_member: Free-text name of the person acting for the team
        country: Country the code was generated for
        comments: Free-text comments on a submitted code
        clearance_id: Clearance reference of a cleared code
        date: When it happened; defaults to now

    Returns:
        Created HistoryEntry

    Raises:
        InvalidHistoryTypeError: If entry_type is not a known type
    """
    if entry_type not in HistoryType.values:
        raise InvalidHistoryTypeError(f"Unknown history type: {entry_type!r}")

    fields = {
        'type': entry_type,
        'user': user,
        'team_member': team_member or '',
        'code': str(code).strip().upper(),
        'country': country or '',
        'comments': comments or '',
        'clearance_id': clearance_id or '',
    }
    if date is not None:
        fields['date'] = date

    entry = HistoryEntry.objects.create(**fields)
    logger.debug("Recorded %s history entry for %s", entry_type, entry.code)
    return entry


def clamp_limit(limit: Union[int, str, None]) -> int:
    """
    Clamp a requested page size into [1, HISTORY_MAX_LIMIT].

    A missing, zero or non-numeric limit means the default page size.
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = 0
    if not limit:
        limit = settings.HISTORY_DEFAULT_LIMIT
    return min(max(limit, 1), settings.HISTORY_MAX_LIMIT)


def list_entries(
    *,
    entry_type: Optional[str] = None,
    user_id: Optional[UUID] = None,
    limit: Union[int, str, None] = None
) -> QuerySet:
    """
    Return history entries newest-first.

    Unknown entry types are ignored rather than rejected, so a stale
    filter from a client still lists everything.
    """
    queryset = HistoryEntry.objects.select_related('user').order_by('-date', '-id')

    if entry_type and entry_type in HistoryType.values:
        queryset = queryset.filter(type=entry_type)
    if user_id:
        queryset = queryset.filter(user_id=user_id)

    return queryset[:clamp_limit(limit)]
