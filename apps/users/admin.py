"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {"fields": ("username", "first_name", "last_name", "phone")},
        ),
        (
            _("Club"),
            {"fields": ("role", "membership_tier")},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "username", "role", "membership_tier", "password1", "password2"),
            },
        ),
    )
    list_display = ("email", "username", "role", "membership_tier", "is_active", "created_at")
    list_filter = ("role", "membership_tier", "is_active", "is_staff")
    search_fields = ("email", "username", "first_name", "last_name", "phone")
    ordering = ("-created_at",)
