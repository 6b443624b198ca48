import threading
from datetime import date, datetime
from unittest import mock
from zoneinfo import ZoneInfo

import pytest
from django.db import connection

from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.bookings.models import Booking
from apps.bookings.services import (
    BookingConflictError,
    cancel_booking,
    create_booking,
    ensure_slot_is_available,
    fetch_booked_slots,
    find_interval_conflicts,
)
from apps.users.membership import MembershipLimitExceeded
from apps.users.models import User
from apps.yachts.models import Yacht
from shared.application.message_bus import MessageBus

BOOKING_DATE = date(2025, 7, 4)
NEW_YORK = ZoneInfo("America/New_York")


@pytest.fixture
def member(db):
    return User.objects.create_user(email="member@example.com", password="pass", username="captain_jack")


@pytest.fixture
def rival(db):
    return User.objects.create_user(email="rival@example.com", password="pass", first_name="Anne", last_name="Bonny")


@pytest.fixture
def yacht(db):
    return Yacht.objects.create(name="Sea Breeze", location="Marina Bay", size=40, capacity=6)


@pytest.fixture
def recording_bus():
    bus = MessageBus()
    bus.received = []
    bus.register_event_handler(BookingCreated, bus.received.append)
    bus.register_event_handler(BookingCancelled, bus.received.append)
    return bus


@pytest.mark.django_db
def test_create_booking_resolves_window(member, yacht):
    booking = create_booking(member, yacht, BOOKING_DATE, "night", guest_count=3)

    assert booking.status == Booking.Status.CONFIRMED
    assert booking.start_time == datetime(2025, 7, 4, 21, 0, tzinfo=NEW_YORK)
    assert booking.end_time == datetime(2025, 7, 5, 1, 0, tzinfo=NEW_YORK)
    assert booking.total_price == 0


@pytest.mark.django_db
def test_second_booking_for_same_slot_conflicts(member, rival, yacht):
    create_booking(member, yacht, BOOKING_DATE, "evening")

    with pytest.raises(BookingConflictError):
        create_booking(rival, yacht, BOOKING_DATE, "evening")

    assert Booking.objects.count() == 1


@pytest.mark.django_db
def test_race_past_the_precheck_is_stopped_by_the_constraint(member, rival, yacht):
    # Both requests pass the read-side check, as two concurrent requests would
    with mock.patch("apps.bookings.services.ensure_slot_is_available"):
        winner = create_booking(member, yacht, BOOKING_DATE, "evening")
        with pytest.raises(BookingConflictError):
            create_booking(rival, yacht, BOOKING_DATE, "evening")

    confirmed = Booking.objects.confirmed().for_yacht_on(yacht.pk, BOOKING_DATE)
    assert list(confirmed) == [winner]


@pytest.mark.django_db
def test_ensure_slot_is_available_ignores_cancelled(member, yacht):
    booking = create_booking(member, yacht, BOOKING_DATE, "morning")
    with pytest.raises(BookingConflictError):
        ensure_slot_is_available(yacht, BOOKING_DATE, "morning")

    cancel_booking(booking, "Engine trouble")

    ensure_slot_is_available(yacht, BOOKING_DATE, "morning")


@pytest.mark.django_db
def test_membership_limit(member):
    large = Yacht.objects.create(name="Leviathan", location="Marina Bay", size=80, capacity=20)

    with pytest.raises(MembershipLimitExceeded):
        create_booking(member, large, BOOKING_DATE, "morning")

    member.membership_tier = User.MembershipTier.PLATINUM
    create_booking(member, large, BOOKING_DATE, "morning")


@pytest.mark.django_db
def test_events_publish_after_commit(member, yacht, recording_bus, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        booking = create_booking(member, yacht, BOOKING_DATE, "afternoon", bus=recording_bus)

    assert recording_bus.received == []
    for callback in callbacks:
        callback()

    [event] = recording_bus.received
    assert isinstance(event, BookingCreated)
    assert (event.booking_id, event.yacht_id, event.user_id) == (booking.pk, yacht.pk, member.pk)
    assert event.slot == "afternoon"


@pytest.mark.django_db
def test_failed_booking_publishes_nothing(member, rival, yacht, recording_bus, django_capture_on_commit_callbacks):
    create_booking(member, yacht, BOOKING_DATE, "evening")

    with django_capture_on_commit_callbacks(execute=True):
        with mock.patch("apps.bookings.services.ensure_slot_is_available"):
            with pytest.raises(BookingConflictError):
                create_booking(rival, yacht, BOOKING_DATE, "evening", bus=recording_bus)

    assert recording_bus.received == []


@pytest.mark.django_db
def test_cancel_emits_event(member, yacht, recording_bus, django_capture_on_commit_callbacks):
    booking = create_booking(member, yacht, BOOKING_DATE, "evening")

    with django_capture_on_commit_callbacks(execute=True):
        cancel_booking(booking, "Storm warning", bus=recording_bus)

    [event] = recording_bus.received
    assert isinstance(event, BookingCancelled)
    assert event.reason == "Storm warning"


@pytest.mark.django_db
def test_fetch_booked_slots_uses_display_names(member, rival, yacht):
    create_booking(member, yacht, BOOKING_DATE, "morning")
    create_booking(rival, yacht, BOOKING_DATE, "night")
    cancelled = create_booking(rival, yacht, BOOKING_DATE, "evening")
    cancel_booking(cancelled)

    booked = {item.slot.value: item.renter_name for item in fetch_booked_slots(yacht.pk, BOOKING_DATE)}

    assert booked == {"morning": "captain_jack", "night": "Anne Bonny"}


@pytest.mark.django_db
def test_find_interval_conflicts(member, yacht):
    booking = create_booking(member, yacht, BOOKING_DATE, "afternoon")

    overlapping = find_interval_conflicts(
        yacht,
        datetime(2025, 7, 4, 16, 0, tzinfo=NEW_YORK),
        datetime(2025, 7, 4, 18, 0, tzinfo=NEW_YORK),
    )
    touching = find_interval_conflicts(
        yacht,
        datetime(2025, 7, 4, 17, 0, tzinfo=NEW_YORK),
        datetime(2025, 7, 4, 21, 0, tzinfo=NEW_YORK),
    )

    assert list(overlapping) == [booking]
    assert not touching.exists()


@pytest.mark.django_db(transaction=True)
def test_concurrent_requests_for_one_slot_store_exactly_one_booking():
    first = User.objects.create_user(email="first@example.com", password="pass")
    second = User.objects.create_user(email="second@example.com", password="pass")
    boat = Yacht.objects.create(name="Wind Dancer", location="Marina Bay", size=30, capacity=6)
    barrier = threading.Barrier(2)
    outcomes = []

    def book(user):
        try:
            barrier.wait(timeout=10)
            create_booking(user, boat, BOOKING_DATE, "afternoon")
            outcomes.append("booked")
        except BookingConflictError:
            outcomes.append("conflict")
        finally:
            connection.close()

    threads = [threading.Thread(target=book, args=(user,)) for user in (first, second)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert sorted(outcomes) == ["booked", "conflict"]
    assert Booking.objects.confirmed().for_yacht_on(boat.pk, BOOKING_DATE).count() == 1
