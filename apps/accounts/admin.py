from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


def _badge(label, background, color='white'):
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        background, color, label,
    )


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for accounts.

    Staff accounts are price moderators, so the main bulk actions here
    grant and revoke moderation rights.
    """

    list_display = [
        'email',
        'display_name',
        'is_active_badge',
        'role_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
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
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        if obj.is_active:
            return _badge('Active', '#6B8E5E')
        return _badge('Inactive', '#B85C5C')
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    def role_badge(self, obj):
        if obj.is_staff:
            return _badge('Moderator', '#A47449')
        return _badge('User', '#ccc', '#666')
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'is_staff'

    actions = [
        'activate_users',
        'deactivate_users',
        'grant_moderation',
        'revoke_moderation',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Grant price moderation rights')
    def grant_moderation(self, request, queryset):
        count = queryset.update(is_staff=True)
        self.message_user(request, f'{count} user(s) can now moderate prices.')

    @admin.action(description='Revoke price moderation rights')
    def revoke_moderation(self, request, queryset):
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_staff=False)
        self.message_user(request, f'Revoked moderation for {count} user(s).')
