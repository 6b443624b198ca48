"""Message bus handlers for booking events."""

from __future__ import annotations

import logging

from .domain.events import BookingCancelled, BookingCreated
from .tasks import notify_booking_created

logger = logging.getLogger(__name__)


def on_booking_created(event: BookingCreated) -> None:
    notify_booking_created.delay(event.booking_id)


def on_booking_cancelled(event: BookingCancelled) -> None:
    logger.info("Slot %s on %s released for yacht %s", event.slot, event.booking_date, event.yacht_id)
