from django.contrib import admin

from .models import ClubService, ServicePayment


@admin.register(ClubService)
class ClubServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "provider", "price_per_session", "is_available")
    list_filter = ("category", "is_available")
    search_fields = ("name", "description", "provider__email")


@admin.register(ServicePayment)
class ServicePaymentAdmin(admin.ModelAdmin):
    list_display = ("provider_intent_id", "user", "amount", "currency", "status", "created_at")
    list_filter = ("status", "currency")
    search_fields = ("provider_intent_id", "user__email", "description")
    readonly_fields = ("provider_intent_id", "refunded_amount", "created_at", "updated_at")
