"""Club services and the payments members make for them."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import Money


class ClubService(models.Model):
    """A bookable concierge service offered to members at a per-session price."""

    provider = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="club_services",
        limit_choices_to={"role": "service_provider"},
    )
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price_per_session = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Base price before the member's tier reduction."),
    )
    duration = models.PositiveIntegerField(null=True, blank=True, help_text=_("Minutes per session."))
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "name"]
        verbose_name = _("Club service")
        verbose_name_plural = _("Club services")

    def __str__(self) -> str:
        return self.name


class ServicePayment(models.Model):
    """A Stripe payment intent created for one or more club services."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SUCCEEDED = "succeeded", _("Succeeded")
        FAILED = "failed", _("Failed")
        REFUNDED = "refunded", _("Refunded")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="service_payments",
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="usd")
    description = models.CharField(max_length=255, blank=True)
    service_ids = models.JSONField(default=list, blank=True)
    provider_intent_id = models.CharField(max_length=255, unique=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    refunded_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = _("Service payment")
        verbose_name_plural = _("Service payments")

    def __str__(self) -> str:
        return f"{self.provider_intent_id} ({self.get_status_display()})"

    @property
    def money(self) -> Money:
        return Money(self.amount, self.currency)
