"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .membership import get_membership_benefits

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    display_name = serializers.ReadOnlyField()
    max_yacht_size = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "display_name",
            "first_name",
            "last_name",
            "phone",
            "role",
            "membership_tier",
            "max_yacht_size",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "membership_tier",
            "created_at",
            "updated_at",
        ]

    def get_max_yacht_size(self, obj) -> int | None:  # type: ignore
        limit = get_membership_benefits(obj.membership_tier).max_yacht_size
        return None if limit == float("inf") else int(limit)
