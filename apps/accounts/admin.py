# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for team accounts.

    Provides:
    - User listing with team, pool type and role
    - Filtering by pool type and status
    - Search by email and team name
    - Bulk activation/deactivation and pool type switching
    """

    list_display = [
        'email',
        'team_name',
        'user_type_badge',
        'is_active',
        'is_staff_badge',
        'held_tickets',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'user_type',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'team_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'team_name', 'user_type', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'team_name', 'user_type', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def user_type_badge(self, obj):
        """Display pool type as colored badge."""
        color = '#3B6EA5' if obj.user_type == 'HSV' else '#A47449'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            obj.user_type,
        )
    user_type_badge.short_description = 'Type'
    user_type_badge.admin_order_field = 'user_type'

    def is_staff_badge(self, obj):
        """Display staff status as colored badge."""
        if obj.is_staff:
            return format_html(
                '<span style="background: #A47449; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Admin</span>'
            )
        return format_html(
            '<span style="background: #ccc; color: #666; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Team</span>'
        )
    is_staff_badge.short_description = 'Role'
    is_staff_badge.admin_order_field = 'is_staff'

    def held_tickets(self, obj):
        return obj.assigned_tickets.count()
    held_tickets.short_description = 'Held codes'

    actions = [
        'activate_users',
        'deactivate_users',
        'switch_to_hsv',
        'switch_to_osv',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Set pool type to HSV')
    def switch_to_hsv(self, request, queryset):
        count = queryset.update(user_type='HSV')
        self.message_user(request, f'Updated {count} user(s) to HSV.')

    @admin.action(description='Set pool type to OSV')
    def switch_to_osv(self, request, queryset):
        count = queryset.update(user_type='OSV')
        self.message_user(request, f'Updated {count} user(s) to OSV.')
