from datetime import date
from unittest import mock

import pytest
from django.db import DatabaseError

from apps.bookings.domain.availability import (
    AvailabilityChecker,
    AvailabilityResult,
    AvailabilityUnavailable,
    BookedSlot,
)
from apps.bookings.domain.slots import TimeSlot
from apps.bookings.models import BookingQuerySet
from apps.bookings.services import fetch_booked_slots


def fetcher_for(bookings_by_key):
    calls = []

    def fetch(yacht_id, on_date):
        calls.append((yacht_id, on_date))
        return bookings_by_key.get((yacht_id, on_date), [])

    fetch.calls = calls
    return fetch


def test_no_bookings_means_every_slot_available():
    result = AvailabilityChecker(fetcher_for({})).check(1, date(2025, 7, 4))
    assert result.available_slots == list(TimeSlot)
    assert not result.is_unknown


def test_booked_slot_is_the_only_unavailable_one():
    fetch = fetcher_for({(7, date(2025, 7, 4)): [BookedSlot(TimeSlot.EVENING, "captain_jack")]})

    result = AvailabilityChecker(fetch).check(7, date(2025, 7, 4))

    assert result.to_dict() == {
        "morning": {"available": True},
        "afternoon": {"available": True},
        "evening": {"available": False, "bookedBy": "captain_jack"},
        "night": {"available": True},
    }
    assert fetch.calls == [(7, date(2025, 7, 4))]


def test_other_dates_and_yachts_do_not_interfere():
    fetch = fetcher_for({(7, date(2025, 7, 4)): [BookedSlot(TimeSlot.MORNING, "a")]})
    checker = AvailabilityChecker(fetch)

    assert checker.check(7, date(2025, 7, 5)).is_available("morning")
    assert checker.check(8, date(2025, 7, 4)).is_available("morning")


def test_missing_renter_name_uses_placeholder():
    fetch = fetcher_for({(3, date(2025, 7, 4)): [BookedSlot("night")]})
    result = AvailabilityChecker(fetch).check(3, date(2025, 7, 4))
    assert result["night"].booked_by == "Another member"


@pytest.mark.parametrize("yacht_id", [0, -4, "7", True])
def test_invalid_yacht_id(yacht_id):
    with pytest.raises(ValueError):
        AvailabilityChecker(fetcher_for({})).check(yacht_id, date(2025, 7, 4))


def test_fetch_failure_fails_closed():
    def broken_fetch(yacht_id, on_date):
        raise AvailabilityUnavailable("database down")

    checker = AvailabilityChecker(broken_fetch)

    with pytest.raises(AvailabilityUnavailable):
        checker.check(1, date(2025, 7, 4))

    result = checker.check_fail_closed(1, date(2025, 7, 4))
    assert result.available_slots == []
    assert result.is_unknown
    assert all(status == {"available": False, "unknown": True} for status in result.to_dict().values())


def test_result_must_cover_every_slot():
    with pytest.raises(ValueError):
        AvailabilityResult({})


@pytest.mark.django_db
def test_database_errors_become_availability_unavailable():
    with mock.patch.object(BookingQuerySet, "confirmed", side_effect=DatabaseError("connection lost")):
        with pytest.raises(AvailabilityUnavailable):
            fetch_booked_slots(1, date(2025, 7, 4))
