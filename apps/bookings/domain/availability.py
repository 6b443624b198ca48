"""
Availability Checker

Reports, for one yacht on one date, which of the four slots are free.
Slots are fixed and never overlap, so a slot is taken exactly when an
existing confirmed booking for that yacht and date holds the same slot.

When bookings cannot be fetched the checker fails closed: every slot is
reported unavailable so a transient error can never lead to a double
booking.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional
import logging

from apps.bookings.domain.slots import TimeSlot, slots

logger = logging.getLogger(__name__)

DEFAULT_RENTER_NAME = 'Another member'


class AvailabilityUnavailable(Exception):
    """Existing bookings could not be fetched"""


@dataclass(frozen=True)
class BookedSlot:
    """A slot held by an existing booking, as returned by a fetcher"""
    slot: TimeSlot
    renter_name: str = ''


@dataclass(frozen=True)
class SlotStatus:
    available: bool
    booked_by: Optional[str] = None
    unknown: bool = False

    def to_dict(self) -> dict:
        data = {'available': self.available}
        if self.booked_by:
            data['bookedBy'] = self.booked_by
        if self.unknown:
            data['unknown'] = True
        return data


@dataclass(frozen=True)
class AvailabilityResult:
    """Per-slot status covering every slot in the catalog"""
    statuses: Dict[TimeSlot, SlotStatus] = field(default_factory=dict)

    def __post_init__(self):
        missing = [definition.id for definition in slots() if definition.id not in self.statuses]
        if missing:
            raise ValueError(f"Availability result is missing slots: {missing}")

    @classmethod
    def fail_closed(cls) -> 'AvailabilityResult':
        """Every slot unavailable with unknown status"""
        return cls({
            definition.id: SlotStatus(available=False, unknown=True)
            for definition in slots()
        })

    def __getitem__(self, slot_id) -> SlotStatus:
        return self.statuses[TimeSlot.parse(slot_id)]

    def is_available(self, slot_id) -> bool:
        return self[slot_id].available

    @property
    def available_slots(self) -> List[TimeSlot]:
        return [definition.id for definition in slots() if self.statuses[definition.id].available]

    @property
    def is_unknown(self) -> bool:
        return any(status.unknown for status in self.statuses.values())

    def to_dict(self) -> dict:
        return {
            definition.id.value: self.statuses[definition.id].to_dict()
            for definition in slots()
        }


BookingFetcher = Callable[[int, date], Iterable[BookedSlot]]


class AvailabilityChecker:
    """
    Compute slot availability from a booking fetcher

    The fetcher returns the confirmed bookings of one yacht on one date
    and raises AvailabilityUnavailable when the store cannot be read.
    """

    def __init__(self, fetch_bookings: BookingFetcher):
        self._fetch_bookings = fetch_bookings

    def check(self, yacht_id: int, on_date: date) -> AvailabilityResult:
        """
        Raises:
            ValueError: yacht_id is not a positive integer
            AvailabilityUnavailable: bookings could not be fetched
        """
        if isinstance(yacht_id, bool) or not isinstance(yacht_id, int) or yacht_id <= 0:
            raise ValueError(f"Yacht id must be a positive integer, got {yacht_id!r}")

        booked: Dict[TimeSlot, BookedSlot] = {}
        for booking in self._fetch_bookings(yacht_id, on_date):
            # First booking wins if the store ever holds duplicates
            booked.setdefault(TimeSlot.parse(booking.slot), booking)

        statuses = {}
        for definition in slots():
            holder = booked.get(definition.id)
            if holder is None:
                statuses[definition.id] = SlotStatus(available=True)
            else:
                statuses[definition.id] = SlotStatus(
                    available=False,
                    booked_by=holder.renter_name or DEFAULT_RENTER_NAME,
                )
        return AvailabilityResult(statuses)

    def check_fail_closed(self, yacht_id: int, on_date: date) -> AvailabilityResult:
        """Like check(), but a fetch failure yields an all-unavailable result"""
        try:
            return self.check(yacht_id, on_date)
        except AvailabilityUnavailable:
            logger.warning(
                "Availability fetch failed for yacht %s on %s, reporting all slots unavailable",
                yacht_id,
                on_date,
                exc_info=True,
            )
            return AvailabilityResult.fail_closed()
