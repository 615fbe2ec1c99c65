from django.db import models


class TicketPool(models.TextChoices):
    HSV = 'HSV', 'HSV'
    OSV = 'OSV', 'OSV'
    COMMON = 'Common', 'Common'


class TicketStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    USED = 'used', 'Used'


class Ticket(models.Model):
    """
    A single Ek-code in one of the pools.

    The pool is fixed when the code is imported. Status moves between
    available and used; assigned_to is only set while the code is used.
    """

    code = models.CharField(max_length=10, unique=True, db_index=True)
    pool = models.CharField(max_length=6, choices=TicketPool.choices)
    status = models.CharField(
        max_length=9,
        choices=TicketStatus.choices,
        default=TicketStatus.AVAILABLE
    )

    # Current holder
    assigned_to = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tickets'
    )
    assigned_at = models.DateTimeField(null=True, blank=True)

    # Timestamps (created_at doubles as the FIFO key for allocation)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tickets'
        indexes = [
            models.Index(fields=['pool', 'status'], name='tickets_pool_status_idx'),
        ]
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.code} ({self.pool}, {self.status})"

    @property
    def is_available(self):
        return self.status == TicketStatus.AVAILABLE
