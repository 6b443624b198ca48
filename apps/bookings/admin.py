"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin, messages

from .models import Booking
from .services import cancel_booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "yacht",
        "user",
        "booking_date",
        "slot",
        "status",
        "guest_count",
        "created_at",
    )
    list_filter = ("status", "slot", "booking_date")
    search_fields = ("yacht__name", "user__email", "user__username")
    # Slot, date and time window are fixed at booking time; changes go through
    # cancel and rebook so the slot uniqueness rule stays intact.
    readonly_fields = (
        "user",
        "yacht",
        "booking_date",
        "slot",
        "start_time",
        "end_time",
        "status",
        "total_price",
        "cancelled_at",
        "cancellation_reason",
        "created_at",
        "updated_at",
    )
    actions = ["cancel_selected"]

    def has_add_permission(self, request):
        # Bookings are created through the API only
        return False

    def has_delete_permission(self, request, obj=None):
        return request.user.is_superuser

    @admin.action(description="Cancel selected bookings")
    def cancel_selected(self, request, queryset):
        cancelled = 0
        for booking in queryset.confirmed():
            cancel_booking(booking, "Cancelled by club administration")
            cancelled += 1
        self.message_user(request, f"{cancelled} booking(s) cancelled.", messages.SUCCESS)
