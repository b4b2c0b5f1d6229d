"""
accounts/admin.py
─────────────────
Admin registration for the dashboard User.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Extends the default UserAdmin to surface the display name and role.
    """

    list_display  = ('email', 'name', 'role', 'is_staff', 'is_active')
    list_filter   = BaseUserAdmin.list_filter + ('role',)
    search_fields = ('email', 'name', 'username')
    ordering      = ('email',)

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Dashboard', {'fields': ('name', 'role')}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Dashboard', {'fields': ('email', 'name', 'role')}),
    )
