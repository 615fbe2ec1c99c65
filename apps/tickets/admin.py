from django import forms
from django.contrib import admin

from apps.tickets.models import Ticket, TicketStatus
from apps.tickets.services import (
    delete_tickets,
    normalize_code,
    normalize_pool,
    return_ticket,
    InvalidCodeFormatError,
)


class TicketAdminForm(forms.ModelForm):
    """Applies the same code rules as the import endpoints."""

    class Meta:
        model = Ticket
        fields = ['code', 'pool']

    def clean_code(self):
        try:
            return normalize_code(self.cleaned_data.get('code'))
        except InvalidCodeFormatError:
            raise forms.ValidationError(
                "Code must be exactly 10 letters (A-Z) or digits."
            )

    def clean_pool(self):
        return normalize_pool(self.cleaned_data.get('pool'))


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    """Admin interface for Ek-code tickets."""

    form = TicketAdminForm
    list_display = [
        'code',
        'pool',
        'status',
        'assigned_to',
        'assigned_at',
        'created_at'
    ]
    list_filter = ['pool', 'status', 'created_at']
    search_fields = ['code', 'assigned_to__email', 'assigned_to__team_name']
    readonly_fields = ['status', 'assigned_to', 'assigned_at', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['created_at', 'id']

    actions = ['return_selected']

    def get_readonly_fields(self, request, obj=None):
        # A code keeps its pool once it exists
        if obj is not None:
            return self.readonly_fields + ['code', 'pool']
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        # Used codes are held by someone and can only be returned
        if obj is not None and not obj.is_available:
            return False
        return super().has_delete_permission(request, obj)

    def delete_model(self, request, obj):
        delete_tickets(codes=[obj.code])

    def delete_queryset(self, request, queryset):
        delete_tickets(codes=list(queryset.values_list('code', flat=True)))

    def return_selected(self, request, queryset):
        """Put selected used tickets back into their pool."""
        returned = 0
        for ticket in queryset.filter(status=TicketStatus.USED):
            if return_ticket(code=ticket.code, user=request.user).changed:
                returned += 1
        self.message_user(request, f"Returned {returned} tickets")
    return_selected.short_description = "Return selected tickets to available"
