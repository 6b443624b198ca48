"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import notify_booking_created as send_booking_notifications

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.notify_booking_created")
def notify_booking_created(booking_id: int) -> int:
    """Tell club admins and the yacht owner about a new booking.

    Returns the number of notifications created.
    """

    try:
        booking = Booking.objects.select_related("yacht", "yacht__owner", "user").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning("Booking %s disappeared before notifications were sent", booking_id)
        return 0

    return len(send_booking_notifications(booking))
