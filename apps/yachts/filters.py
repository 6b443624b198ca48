"""FilterSet definitions for the fleet listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Yacht


class YachtFilterSet(django_filters.FilterSet):
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    size_min = django_filters.NumberFilter(field_name="size", lookup_expr="gte")
    size_max = django_filters.NumberFilter(field_name="size", lookup_expr="lte")
    guests = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")

    class Meta:
        model = Yacht
        fields = ["location", "is_available", "owner"]
