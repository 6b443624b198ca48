"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date, datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.db import DatabaseError, IntegrityError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.users.membership import ensure_member_can_book
from shared.application.uow import DjangoUnitOfWork

from .domain.availability import AvailabilityChecker, AvailabilityUnavailable, BookedSlot
from .domain.events import BookingCancelled, BookingCreated
from .domain.slots import TimeSlot, get_slot
from .domain.time_resolver import BookingTimeResolver

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .models import Booking

logger = logging.getLogger(__name__)


class BookingConflictError(Exception):
    """Raised when the requested slot is already booked."""


class BookingStateError(Exception):
    """Raised for a transition the booking lifecycle does not allow."""


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


@lru_cache(maxsize=None)
def _resolver_for(tz_name: str) -> BookingTimeResolver:
    return BookingTimeResolver(tz_name)


def get_time_resolver() -> BookingTimeResolver:
    """Resolver in the club's local timezone."""

    return _resolver_for(getattr(settings, "CLUB_TIME_ZONE", settings.TIME_ZONE))


def fetch_booked_slots(yacht_id: int, on_date: date) -> list[BookedSlot]:
    """Confirmed bookings of a yacht on a date, read from the database."""

    from .models import Booking  # Local import to prevent circular dependency

    try:
        bookings = list(
            Booking.objects.confirmed()
            .for_yacht_on(yacht_id, on_date)
            .select_related("user")
            .order_by("created_at")
        )
    except DatabaseError as exc:
        raise AvailabilityUnavailable(f"Could not load bookings for yacht {yacht_id}") from exc

    return [
        BookedSlot(slot=TimeSlot.parse(booking.slot), renter_name=booking.user.display_name)
        for booking in bookings
    ]


def availability_checker() -> AvailabilityChecker:
    return AvailabilityChecker(fetch_booked_slots)


def ensure_slot_is_available(yacht, booking_date: date, slot, *, exclude_booking_id=None) -> None:
    """Ensure no confirmed booking holds the slot on that date."""

    from .models import Booking

    slot_id = TimeSlot.parse(slot)
    bookings_qs = Booking.objects.confirmed().for_yacht_on(yacht.pk, booking_date).filter(slot=slot_id.value)

    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    bookings_qs = _lock_queryset_if_possible(bookings_qs)

    if bookings_qs.exists():
        raise BookingConflictError(f"{get_slot(slot_id).label} is already booked for this yacht on {booking_date}.")


def create_booking(
    user,
    yacht,
    booking_date: date,
    slot,
    *,
    guest_count: int = 1,
    special_requests: str = "",
    bus=None,
) -> "Booking":
    """Book one slot of a yacht for a member.

    Membership limits are checked before anything touches the database.
    The slot check and insert run in one transaction and the conditional
    unique constraint backs them up, so of two concurrent requests for the
    same slot exactly one is stored. BookingCreated is published after
    commit.

    Raises:
        InvalidSlot: unknown slot id
        MembershipLimitExceeded: yacht is too large for the member's tier
        BookingConflictError: the slot is taken
    """

    from .models import Booking

    slot_id = TimeSlot.parse(slot)
    ensure_member_can_book(user, yacht)
    window = get_time_resolver().resolve(booking_date, slot_id)

    try:
        with DjangoUnitOfWork(bus=bus) as uow:
            ensure_slot_is_available(yacht, booking_date, slot_id)
            booking = Booking.objects.create(
                user=user,
                yacht=yacht,
                booking_date=booking_date,
                slot=slot_id.value,
                start_time=window.start,
                end_time=window.end,
                guest_count=guest_count,
                special_requests=special_requests or "",
            )
            uow.add_event(
                BookingCreated(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    yacht_id=yacht.pk,
                    user_id=user.pk,
                    booking_date=booking_date,
                    slot=slot_id.value,
                )
            )
    except IntegrityError as exc:
        logger.info("Slot %s on %s for yacht %s lost a concurrent race", slot_id.value, booking_date, yacht.pk)
        raise BookingConflictError(
            f"{get_slot(slot_id).label} is already booked for this yacht on {booking_date}."
        ) from exc

    logger.info("Booking %s created for yacht %s on %s (%s)", booking.pk, yacht.pk, booking_date, slot_id.value)
    return booking


def cancel_booking(booking: "Booking", reason: str = "", *, bus=None) -> "Booking":
    """Cancel a confirmed booking and release its slot."""

    if not booking.is_active:
        raise BookingStateError("Booking is already cancelled.")

    with DjangoUnitOfWork(bus=bus) as uow:
        booking.mark_cancelled(reason)
        uow.add_event(
            BookingCancelled(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                yacht_id=booking.yacht_id,
                user_id=booking.user_id,
                booking_date=booking.booking_date,
                slot=booking.slot,
                reason=reason,
            )
        )

    logger.info("Booking %s cancelled", booking.pk)
    return booking


def find_interval_conflicts(yacht, start: datetime, end: datetime):
    """Confirmed bookings of the yacht overlapping [start, end)."""

    from .models import Booking

    return Booking.objects.confirmed().filter(yacht=yacht, start_time__lt=end, end_time__gt=start)


def find_yacht(yacht_id: int):
    """Yacht by id, or None when it does not exist.

    Raises:
        AvailabilityUnavailable: the lookup itself failed
    """

    from apps.yachts.models import Yacht

    try:
        return Yacht.objects.filter(pk=yacht_id).first()
    except DatabaseError as exc:
        raise AvailabilityUnavailable(f"Could not load yacht {yacht_id}") from exc
