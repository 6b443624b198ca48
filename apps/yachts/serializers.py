"""Serializers for the fleet."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Yacht


class YachtSerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")

    class Meta:
        model = Yacht
        fields = [
            "id",
            "name",
            "location",
            "size",
            "capacity",
            "owner",
            "owner_id",
            "description",
            "image_url",
            "amenities",
            "price_per_hour",
            "is_available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner_id", "created_at", "updated_at"]
        extra_kwargs = {"owner": {"write_only": True, "required": False}}

    def validate_amenities(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Amenities must be a list of strings.")
        return value
