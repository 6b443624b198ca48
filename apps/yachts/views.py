"""API views for the fleet."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from rest_framework import viewsets  # type: ignore

from apps.users.permissions import IsClubAdminOrReadOnly, is_club_admin

from .filters import YachtFilterSet
from .models import Yacht
from .serializers import YachtSerializer


class YachtViewSet(viewsets.ModelViewSet):
    """Members browse the fleet, admins maintain it.

    Yachts marked unavailable are hidden from non-admin users.
    """

    serializer_class = YachtSerializer
    permission_classes = [IsClubAdminOrReadOnly]
    filterset_class = YachtFilterSet
    queryset = Yacht.objects.select_related("owner").all()

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if is_club_admin(user):
            return qs
        if hasattr(user, "is_yacht_owner") and user.is_yacht_owner():
            return qs.filter(Q(is_available=True) | Q(owner=user))
        return qs.filter(is_available=True)
