"""Notification services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Notification

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.payments.models import ServicePayment

logger = logging.getLogger(__name__)


def create_in_app_notification(
    user,
    title: str,
    message: str,
    *,
    type: str = Notification.Type.SYSTEM,
    priority: str = Notification.Priority.NORMAL,
    action_url: str = "",
    data: dict | None = None,
) -> Notification:
    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        priority=priority,
        action_url=action_url,
        data=data or {},
    )
    logger.info("Notification %s created for user %s: %s", notification.pk, user.pk, title)
    return notification


def club_admins() -> Iterable:
    User = get_user_model()
    return User.objects.filter(
        Q(role=User.RoleChoices.ADMIN) | Q(is_staff=True) | Q(is_superuser=True),
        is_active=True,
    )


def notify_booking_created(booking: "Booking") -> list[Notification]:
    """Notify every club admin and the yacht owner about a new booking."""

    renter = booking.user.display_name or booking.user.email
    message = (
        f"{renter} booked {booking.yacht.name} for the {booking.slot_label} "
        f"on {booking.booking_date:%B %d, %Y}."
    )
    data = {
        "booking_id": booking.pk,
        "yacht_id": booking.yacht_id,
        "date": booking.booking_date.isoformat(),
        "slot": booking.slot,
    }

    recipients = {admin.pk: admin for admin in club_admins()}
    owner = booking.yacht.owner
    if owner is not None:
        recipients.setdefault(owner.pk, owner)

    return [
        create_in_app_notification(
            recipient,
            "New Yacht Booking",
            message,
            type=Notification.Type.BOOKING,
            action_url=f"/bookings/{booking.pk}",
            data=data,
        )
        for recipient in recipients.values()
    ]


def notify_payment_succeeded(payment: "ServicePayment") -> Notification:
    return create_in_app_notification(
        payment.user,
        "Payment Received",
        f"Your payment of {payment.amount} {payment.currency.upper()} for {payment.description} was received.",
        type=Notification.Type.PAYMENT,
        data={"payment_intent_id": payment.provider_intent_id},
    )
