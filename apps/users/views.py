"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsClubAdmin, is_club_admin
from .serializers import UserSerializer

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    """User management.

    - `me` returns the current user's profile
    - list and create are restricted to club admins
    - users may update their own profile
    """

    serializer_class = UserSerializer
    queryset = User.objects.all()
    http_method_names = ["get", "patch", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action in {"me", "partial_update", "retrieve"}:
            return [permissions.IsAuthenticated()]
        return [IsClubAdmin()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if is_club_admin(self.request.user):
            return qs
        return qs.filter(pk=self.request.user.pk)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        if not is_club_admin(request.user) and str(request.user.pk) != str(kwargs.get("pk")):
            return Response(status=status.HTTP_403_FORBIDDEN)
        return super().partial_update(request, *args, **kwargs)

    @action(detail=False, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """Return the current user's profile."""
        serializer = UserSerializer(request.user)
        return Response(serializer.data)
