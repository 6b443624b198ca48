"""Role-based permission classes shared by the club apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_club_admin(user) -> bool:  # type: ignore
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_club_admin") and user.is_club_admin()


class IsClubAdmin(permissions.BasePermission):
    """Only club admins and Django staff."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_club_admin(request.user)


class IsClubAdminOrReadOnly(permissions.BasePermission):
    """Anyone authenticated can read, admins can write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_club_admin(user)
