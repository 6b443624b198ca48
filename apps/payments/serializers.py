"""Serializers for payment endpoints."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import ClubService, ServicePayment
from .services import price_services


MINIMUM_CHARGE = Decimal("0.50")


class CreatePaymentIntentSerializer(serializers.Serializer):
    """Services to pay for; the amount is priced server side.

    A client may send the total it displayed as ``amount``; it must match
    the current price for the member's tier.
    """

    service_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), min_length=1)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_service_ids(self, value):
        service_ids = list(dict.fromkeys(value))
        found = ClubService.objects.filter(pk__in=service_ids, is_available=True).in_bulk()
        missing = [service_id for service_id in service_ids if service_id not in found]
        if missing:
            raise serializers.ValidationError(
                f"Unknown or unavailable services: {', '.join(str(service_id) for service_id in missing)}"
            )
        return service_ids

    def validate(self, attrs):
        found = ClubService.objects.in_bulk(attrs["service_ids"])
        services = [found[service_id] for service_id in attrs["service_ids"]]
        total = price_services(self.context["request"].user, services)

        if total.amount < MINIMUM_CHARGE:
            raise serializers.ValidationError({"service_ids": f"Total is below the minimum charge of {MINIMUM_CHARGE}."})
        expected = attrs.get("amount")
        if expected is not None and expected != total.amount:
            raise serializers.ValidationError({"amount": f"Amount does not match the current price of {total.amount}."})

        attrs["services"] = services
        return attrs


class PaymentIntentReferenceSerializer(serializers.Serializer):
    paymentIntentId = serializers.CharField(max_length=255)


class RefundSerializer(PaymentIntentReferenceSerializer):
    amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
        required=False,
        allow_null=True,
    )


class ServicePaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = ServicePayment
        fields = [
            "id",
            "amount",
            "currency",
            "description",
            "service_ids",
            "provider_intent_id",
            "status",
            "refunded_amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
