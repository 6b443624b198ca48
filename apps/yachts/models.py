"""Fleet domain models for the yacht club."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Yacht(models.Model):
    """A yacht in the club fleet."""

    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, help_text=_("Home marina."))
    size = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Length in feet. Membership tiers cap the size a member may book."),
    )
    capacity = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Maximum number of guests on board."),
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="yachts",
    )
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    amenities = models.JSONField(default=list, blank=True)
    price_per_hour = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Informational; member rentals are complimentary."),
    )
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Yacht")
        verbose_name_plural = _("Yachts")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_available"], name="yacht_available_idx"),
            models.Index(fields=["location"], name="yacht_location_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.size}ft)"
