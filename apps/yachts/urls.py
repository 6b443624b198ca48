"""URL routing for the fleet."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import YachtViewSet

router = DefaultRouter()
router.register(r"", YachtViewSet, basename="yacht")

urlpatterns = [
    path("", include(router.urls)),
]
