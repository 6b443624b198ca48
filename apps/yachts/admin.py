"""Admin registration for the fleet."""

from __future__ import annotations

from django.contrib import admin

from .models import Yacht


@admin.register(Yacht)
class YachtAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "size", "capacity", "owner", "is_available")
    list_filter = ("is_available", "location")
    search_fields = ("name", "location", "owner__email")
    readonly_fields = ("created_at", "updated_at")
