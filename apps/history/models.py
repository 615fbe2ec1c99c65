from django.db import models
from django.utils import timezone


class HistoryType(models.TextChoices):
    GENERATED = 'generated', 'Generated'
    SUBMITTED = 'submitted', 'Submitted'
    CLEARED = 'cleared', 'Cleared'


class HistoryEntry(models.Model):
    """Append-only record of what happened to an Ek-code."""

    type = models.CharField(max_length=9, choices=HistoryType.choices)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='history_entries'
    )
    team_member = models.CharField(max_length=200, blank=True)
    code = models.CharField(max_length=10, db_index=True)
    country = models.CharField(max_length=100, blank=True)
    comments = models.TextField(blank=True)
    clearance_id = models.CharField(max_length=100, blank=True)
    date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'history_entries'
        indexes = [
            models.Index(fields=['type', '-date'], name='history_type_date_idx'),
        ]
        ordering = ['-date']
        verbose_name_plural = 'history entries'

    def __str__(self):
        return f"{self.type} {self.code} at {self.date:%Y-%m-%d %H:%M}"
