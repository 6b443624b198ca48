"""API views for the booking domain."""

from __future__ import annotations

import logging

from django.db.models import Q  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import is_club_admin
from apps.yachts.models import Yacht

from .domain.availability import AvailabilityResult, AvailabilityUnavailable
from .domain.slots import slots as slot_catalog
from .models import Booking
from .serializers import (
    AvailabilityQuerySerializer,
    BookingCreateSerializer,
    BookingSerializer,
    CancelBookingSerializer,
    IntervalAvailabilitySerializer,
)
from .services import (
    BookingStateError,
    availability_checker,
    cancel_booking,
    find_interval_conflicts,
    find_yacht,
    get_time_resolver,
)

logger = logging.getLogger(__name__)


class IsBookingStakeholder(permissions.BasePermission):
    """The renter, the yacht owner and club admins can see a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_club_admin(user):
            return True
        if obj.user_id == user.id:
            return True
        return obj.yacht.owner_id == user.id and request.method in permissions.SAFE_METHODS


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Slot bookings, availability lookups and cancellation."""

    queryset = Booking.objects.select_related("yacht", "yacht__owner", "user").all()
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    filterset_fields = ["yacht", "booking_date", "slot", "status"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if not user.is_authenticated:
            return qs.none()
        if is_club_admin(user):
            return qs
        if user.is_yacht_owner():
            return qs.filter(Q(user=user) | Q(yacht__owner=user))
        return qs.filter(user=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        if booking.user_id != request.user.id and not is_club_admin(request.user):
            return Response(status=status.HTTP_403_FORBIDDEN)

        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            cancel_booking(booking, serializer.validated_data["reason"])
        except BookingStateError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"status": booking.status}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def slots(self, request):  # type: ignore
        return Response({"slots": [definition.to_dict() for definition in slot_catalog()]})

    @action(detail=False, methods=["post"], url_path="check-all-availability")
    def check_all_availability(self, request):  # type: ignore
        """Availability of every slot for one yacht on one date.

        A failed lookup answers 503 with every slot unavailable.
        """
        serializer = AvailabilityQuerySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        yacht_id = serializer.validated_data["yachtId"]
        on_date = serializer.validated_data["date"]

        try:
            yacht = find_yacht(yacht_id)
        except AvailabilityUnavailable:
            logger.exception("Yacht lookup failed for %s; reporting every slot unavailable", yacht_id)
            return Response(
                {"availability": AvailabilityResult.fail_closed().to_dict()},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        if yacht is None:
            raise NotFound("Yacht not found.")

        result = availability_checker().check_fail_closed(yacht.pk, on_date)
        response_status = status.HTTP_503_SERVICE_UNAVAILABLE if result.is_unknown else status.HTTP_200_OK
        return Response({"availability": result.to_dict()}, status=response_status)

    @action(detail=False, methods=["post"], url_path="check-availability")
    def check_availability(self, request):  # type: ignore
        """Whether an arbitrary window is free, and which slot it matches if any."""
        serializer = IntervalAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        yacht = get_object_or_404(Yacht, pk=data["yachtId"])

        available = not find_interval_conflicts(yacht, data["start"], data["end"]).exists()
        matched = get_time_resolver().slot_for_window(data["start"], data["end"])
        return Response({"available": available, "slot": matched.value if matched else None})
