"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import datetime

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.membership import MembershipLimitExceeded
from apps.yachts.models import Yacht

from .domain.slots import slot_choices
from .exceptions import MembershipForbidden, SlotConflict
from .models import Booking
from .services import BookingConflictError, create_booking, get_time_resolver


class AvailabilityQuerySerializer(serializers.Serializer):
    """Body of check-all-availability."""

    yachtId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()


class IntervalAvailabilitySerializer(serializers.Serializer):
    """Body of the interval availability check used by older clients."""

    yachtId = serializers.IntegerField(min_value=1)
    startDate = serializers.DateField()
    startTime = serializers.TimeField()
    endDate = serializers.DateField()
    endTime = serializers.TimeField()

    def validate(self, attrs):  # type: ignore
        tz = get_time_resolver().tz
        start = datetime.combine(attrs["startDate"], attrs["startTime"], tzinfo=tz)
        end = datetime.combine(attrs["endDate"], attrs["endTime"], tzinfo=tz)
        if end <= start:
            raise serializers.ValidationError("End must be after start.")
        attrs["start"] = start
        attrs["end"] = end
        return attrs


class BookingCreateSerializer(serializers.ModelSerializer):
    """Booking of one slot by the current member."""

    yacht = serializers.PrimaryKeyRelatedField(queryset=Yacht.objects.all())
    date = serializers.DateField(source="booking_date")
    slot = serializers.ChoiceField(choices=slot_choices())
    guest_count = serializers.IntegerField(min_value=1, default=1)

    class Meta:
        model = Booking
        fields = [
            "yacht",
            "date",
            "slot",
            "guest_count",
            "special_requests",
        ]
        extra_kwargs = {
            "special_requests": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        yacht: Yacht = attrs["yacht"]
        if not yacht.is_available:
            raise serializers.ValidationError({"yacht": ["This yacht is not available for booking."]})
        if attrs["guest_count"] > yacht.capacity:
            raise serializers.ValidationError(
                {"guest_count": [f"This yacht takes at most {yacht.capacity} guests."]}
            )
        today = timezone.localtime(timezone=get_time_resolver().tz).date()
        if attrs["booking_date"] < today:
            raise serializers.ValidationError({"date": ["Bookings cannot be made for past dates."]})
        return attrs

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        try:
            return create_booking(
                request.user,
                validated_data["yacht"],
                validated_data["booking_date"],
                validated_data["slot"],
                guest_count=validated_data["guest_count"],
                special_requests=validated_data.get("special_requests", ""),
            )
        except BookingConflictError as exc:
            raise SlotConflict(str(exc))
        except MembershipLimitExceeded as exc:
            raise MembershipForbidden(str(exc))


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    user_id = serializers.ReadOnlyField(source="user.id")
    renter_name = serializers.ReadOnlyField(source="user.display_name")
    yacht_id = serializers.ReadOnlyField(source="yacht.id")
    yacht_name = serializers.ReadOnlyField(source="yacht.name")
    slot_label = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "renter_name",
            "yacht_id",
            "yacht_name",
            "booking_date",
            "slot",
            "slot_label",
            "start_time",
            "end_time",
            "guest_count",
            "special_requests",
            "status",
            "total_price",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
