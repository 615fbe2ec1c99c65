"""
Ticket pool allocator.

Manages the available/used state of Ek-codes across the HSV, OSV and
Common pools.

Every transition away from ``available`` is a single conditional UPDATE
(``... WHERE status = 'available'``) and the affected-row count decides
who won. The database is the only point of mutual exclusion: no
in-process locks are held, so several server processes can allocate
from the same table safely.

Example:
    Claiming for an OSV team::

        from apps.tickets.services import claim_next, preferred_pools_for

        ticket = claim_next(
            preferred_pools=preferred_pools_for('OSV'),  # Common, then OSV
            claimant=request.user,
        )
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from django.db import transaction, DatabaseError
from django.db.models import QuerySet
from django.utils import timezone

from apps.history.models import HistoryType
from apps.history.services import record_entry, HistoryServiceError
from apps.tickets.models import Ticket, TicketPool, TicketStatus

from .codes import canonical_code, is_valid_code, normalize_code, normalize_pool
from .exceptions import (
    NoTicketsAvailableError,
    NotAvailableError,
    UnknownCodeError,
)

logger = logging.getLogger(__name__)

POOL_ORDER = [TicketPool.HSV, TicketPool.OSV, TicketPool.COMMON]


@dataclass(frozen=True)
class ReturnResult:
    """Outcome of return_ticket(). changed is False when the code was already available."""

    code: str
    changed: bool

    @property
    def reason(self) -> Optional[str]:
        return None if self.changed else 'already_available'


@dataclass
class AvailableInventory:
    """Available codes in FIFO order, overall and per pool."""

    available: List[str] = field(default_factory=list)
    by_pool: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def counts(self) -> Dict[str, int]:
        return {pool: len(codes) for pool, codes in self.by_pool.items()}


def preferred_pools_for(user_type: Optional[str]) -> List[str]:
    """
    Pool preference used by team claims: shared codes first, then the
    team's own pool. Any type other than OSV is treated as HSV.
    """
    own_pool = TicketPool.OSV if user_type == 'OSV' else TicketPool.HSV
    return [TicketPool.COMMON, own_pool]


def _notify_history(entry_type: str, code: str, **fields) -> None:
    """Append a history entry without letting a failure undo the transition."""
    try:
        with transaction.atomic():
            record_entry(entry_type=entry_type, code=code, **fields)
    except (DatabaseError, HistoryServiceError):
        logger.warning("Failed to record %s history for %s", entry_type, code, exc_info=True)


def _mark_used(queryset: QuerySet, claimant) -> bool:
    """Conditionally flip available -> used; True if this call made the change."""
    now = timezone.now()
    updated = queryset.filter(status=TicketStatus.AVAILABLE).update(
        status=TicketStatus.USED,
        assigned_to=claimant,
        assigned_at=now,
        updated_at=now,
    )
    return updated == 1


def _claim_oldest_in_pool(pool: str, claimant) -> Optional[Ticket]:
    available = Ticket.objects.filter(pool=pool, status=TicketStatus.AVAILABLE)

    while True:
        candidate_id = (
            available
            .order_by('created_at', 'id')
            .values_list('id', flat=True)
            .first()
        )
        if candidate_id is None:
            return None

        if _mark_used(Ticket.objects.filter(id=candidate_id), claimant):
            return Ticket.objects.get(id=candidate_id)

        # Another caller took this code between the lookup and the update
        logger.debug("Lost claim race for ticket %s in pool %s", candidate_id, pool)


def _team_member_for(claimant, team_member: str) -> str:
    if team_member:
        return team_member
    return getattr(claimant, 'team_name', '') or ''


def import_tickets(*, items: Iterable[Tuple[str, Optional[str]]]) -> int:
    """
    Insert codes as available if they don't exist yet.

    Malformed codes are dropped. Existing codes are left untouched,
    whatever pool the new item asks for, so re-importing is a no-op.
    A code repeated within one call is inserted once, with the pool of
    its first occurrence. Items are inserted independently: a failure
    on one item does not roll back the others.

    Args:
        items: (code, pool) pairs; pool names go through normalize_pool()

    Returns:
        Number of newly inserted codes
    """
    pending: Dict[str, str] = {}
    for raw_code, raw_pool in items:
        if not is_valid_code(raw_code):
            continue
        pending.setdefault(canonical_code(raw_code), normalize_pool(raw_pool))

    inserted = 0
    for code, pool in pending.items():
        _, created = Ticket.objects.get_or_create(
            code=code,
            defaults={'pool': pool, 'status': TicketStatus.AVAILABLE},
        )
        if created:
            inserted += 1

    logger.info("Imported %d of %d ticket(s)", inserted, len(pending))
    return inserted


def delete_tickets(*, codes: Iterable[str]) -> int:
    """
    Delete codes that are currently available.

    Used codes are skipped so nobody loses a code they are holding.
    Malformed codes are dropped.

    Returns:
        Number of codes actually deleted
    """
    targets = {canonical_code(code) for code in codes if is_valid_code(code)}
    if not targets:
        return 0

    deleted, _ = Ticket.objects.filter(
        code__in=targets,
        status=TicketStatus.AVAILABLE,
    ).delete()

    if deleted < len(targets):
        logger.info("Deleted %d ticket(s); %d were in use or unknown", deleted, len(targets) - deleted)
    else:
        logger.info("Deleted %d ticket(s)", deleted)
    return deleted


def claim_next(
    *,
    preferred_pools: Iterable[str],
    claimant=None,
    team_member: str = '',
    country: str = ''
) -> Ticket:
    """
    Claim the oldest available code from the first non-empty preferred pool.

    Pools are tried strictly in the order given. Within a pool the code
    imported first is handed out first.

    Args:
        preferred_pools: Pool names in preference order
        claimant: Optional User recorded as the holder
        team_member: Optional name recorded in the history entry
        country: Optional country recorded in the history entry

    Returns:
        The claimed Ticket (status used)

    Raises:
        NoTicketsAvailableError: If every preferred pool is exhausted
    """
    pools = list(preferred_pools)

    for pool in pools:
        ticket = _claim_oldest_in_pool(pool, claimant)
        if ticket is None:
            continue

        logger.info("Claimed %s from %s pool", ticket.code, pool)
        _notify_history(
            HistoryType.GENERATED,
            ticket.code,
            user=claimant,
            team_member=_team_member_for(claimant, team_member),
            country=country,
        )
        return ticket

    raise NoTicketsAvailableError(f"No tickets available in pools {pools}")


def claim_ticket(
    *,
    code: str,
    claimant=None,
    team_member: str = '',
    country: str = ''
) -> Ticket:
    """
    Claim one specific code.

    Raises:
        InvalidCodeFormatError: If code is malformed (checked before any query)
        UnknownCodeError: If the code was never imported
        NotAvailableError: If the code is currently used
    """
    code = normalize_code(code)

    if _mark_used(Ticket.objects.filter(code=code), claimant):
        logger.info("Claimed %s by code", code)
        _notify_history(
            HistoryType.GENERATED,
            code,
            user=claimant,
            team_member=_team_member_for(claimant, team_member),
            country=country,
        )
        return Ticket.objects.get(code=code)

    if Ticket.objects.filter(code=code).exists():
        raise NotAvailableError(f"Ticket {code} is not available")
    raise UnknownCodeError(f"Ticket {code} does not exist")


def return_ticket(
    *,
    code: str,
    user=None,
    team_member: str = '',
    comments: str = '',
    clearance_id: str = ''
) -> ReturnResult:
    """
    Put a code back into its pool.

    Returning a code that is already available succeeds without a change
    (``changed=False``). A clearance_id marks the return as a cleared
    code in the history log; otherwise it is recorded as submitted.

    Raises:
        InvalidCodeFormatError: If code is malformed (checked before any query)
        UnknownCodeError: If the code was never imported
    """
    code = normalize_code(code)

    updated = Ticket.objects.filter(code=code, status=TicketStatus.USED).update(
        status=TicketStatus.AVAILABLE,
        assigned_to=None,
        assigned_at=None,
        updated_at=timezone.now(),
    )

    if updated:
        logger.info("Returned %s to available", code)
        if clearance_id:
            _notify_history(
                HistoryType.CLEARED,
                code,
                user=user,
                team_member=team_member,
                clearance_id=clearance_id,
            )
        else:
            _notify_history(
                HistoryType.SUBMITTED,
                code,
                user=user,
                team_member=_team_member_for(user, team_member),
                comments=comments,
            )
        return ReturnResult(code=code, changed=True)

    if Ticket.objects.filter(code=code).exists():
        return ReturnResult(code=code, changed=False)
    raise UnknownCodeError(f"Ticket {code} does not exist")


def count_available(*, pool: Optional[str] = None) -> int:
    """Number of available codes, optionally restricted to one pool."""
    queryset = Ticket.objects.filter(status=TicketStatus.AVAILABLE)
    if pool is not None:
        queryset = queryset.filter(pool=pool)
    return queryset.count()


def list_available() -> AvailableInventory:
    """All available codes grouped by pool, oldest first."""
    inventory = AvailableInventory(by_pool={pool.value: [] for pool in POOL_ORDER})

    rows = (
        Ticket.objects
        .filter(status=TicketStatus.AVAILABLE)
        .order_by('created_at', 'id')
        .values_list('code', 'pool')
    )
    for code, pool in rows:
        inventory.available.append(code)
        inventory.by_pool.setdefault(pool, []).append(code)

    return inventory


def list_assigned(*, user) -> QuerySet:
    """Codes currently held by a user."""
    return Ticket.objects.filter(assigned_to=user, status=TicketStatus.USED).order_by('assigned_at', 'id')
