# ==========================================
# apps/history/admin.py
# ==========================================

from django.contrib import admin
from .models import HistoryEntry


@admin.register(HistoryEntry)
class HistoryEntryAdmin(admin.ModelAdmin):
    """Read-only admin view of the activity log."""

    list_display = ['date', 'type', 'code', 'user', 'team_member', 'country', 'clearance_id']
    list_filter = ['type', 'date']
    search_fields = ['code', 'team_member', 'clearance_id', 'user__email', 'user__team_name']
    date_hierarchy = 'date'
    ordering = ['-date']
    list_select_related = ['user']

    def has_change_permission(self, request, obj=None):
        # Entries are append-only
        return False
