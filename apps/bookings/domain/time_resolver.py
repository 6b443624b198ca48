"""
Booking Time Resolver

Turns a (date, slot) selection into the concrete start and end instants
stored on a booking. Slot clocks are local marina time.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from shared.domain.value_objects import TimeWindow
from apps.bookings.domain.slots import TimeSlot, get_slot, slots


class BookingTimeResolver:
    """
    Resolve slot selections to timezone-aware windows

    start = date + start_clock
    end   = date + end_clock, or (date + 1 day) + end_clock when the slot
            wraps midnight (night: 21:00 -> 01:00 next day)
    """

    def __init__(self, tz: tzinfo | str = 'UTC'):
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def resolve(self, booking_date: date, slot_id) -> TimeWindow:
        """
        Raises:
            InvalidSlot: slot_id is not in the catalog
        """
        definition = get_slot(slot_id)
        end_date = booking_date + timedelta(days=1) if definition.wraps_midnight else booking_date
        start = datetime.combine(booking_date, definition.start_clock, tzinfo=self.tz)
        end = datetime.combine(end_date, definition.end_clock, tzinfo=self.tz)
        return TimeWindow(start, end)

    def slot_for_window(self, start: datetime, end: datetime) -> Optional[TimeSlot]:
        """Slot whose resolved window matches start/end exactly, if any"""
        local_start = self._to_local(start)
        local_end = self._to_local(end)
        for definition in slots():
            window = self.resolve(local_start.date(), definition.id)
            if window.start == local_start and window.end == local_end:
                return definition.id
        return None

    def _to_local(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self.tz)
        return instant.astimezone(self.tz)
