"""Booking models for the yacht club."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.slots import TimeSlot, get_slot, slot_choices


class BookingQuerySet(models.QuerySet):
    def confirmed(self):  # type: ignore
        return self.filter(status=Booking.Status.CONFIRMED)

    def for_yacht_on(self, yacht_id: int, booking_date):  # type: ignore
        return self.filter(yacht_id=yacht_id, booking_date=booking_date)


class Booking(models.Model):
    """A member's reservation of one yacht for one slot on one date.

    Slot and date never change after creation; cancellation is the only
    transition and it is terminal.
    """

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    yacht = models.ForeignKey(
        "yachts.Yacht",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booking_date = models.DateField(help_text=_("Local date the slot starts on."))
    slot = models.CharField(max_length=16, choices=slot_choices())
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    guest_count = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    special_requests = models.TextField(blank=True)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Yacht rental is complimentary for members."),
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-booking_date", "start_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["yacht", "booking_date", "slot"],
                condition=models.Q(status="confirmed"),
                name="booking_unique_confirmed_slot",
            ),
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_window",
            ),
        ]
        indexes = [
            models.Index(fields=["yacht", "booking_date"], name="booking_yacht_date_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.yacht_id} {self.booking_date} {self.slot}"

    @property
    def slot_label(self) -> str:
        return get_slot(self.slot).label

    @property
    def time_slot(self) -> TimeSlot:
        return TimeSlot.parse(self.slot)

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.CONFIRMED

    def mark_cancelled(self, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancellation_reason", "cancelled_at", "updated_at"])
