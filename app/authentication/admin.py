"""
Django admin configuration for accounts.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for username-based accounts with chat moderation state."""

    list_display = (
        "username",
        "role",
        "is_online",
        "muted",
        "suspended",
        "date_joined",
    )
    list_filter = ("role", "muted", "suspended", "is_staff", "date_joined")
    search_fields = ("username",)
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("username", "password", "role")}),
        (
            "Presence",
            {"fields": ("is_online", "appear_offline", "last_seen", "avatar_url")},
        ),
        (
            "Moderation",
            {
                "fields": (
                    "muted",
                    "muted_until",
                    "muted_reason",
                    "suspended",
                    "suspended_at",
                    "suspended_reason",
                )
            },
        ),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login", "last_username_change")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "password1", "password2", "role"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")
