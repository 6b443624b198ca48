"""
Slot Catalog

The club rents yachts in four fixed daily windows. The catalog is static:
slots never overlap and the night slot runs past midnight into the next
calendar day.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import Tuple


class InvalidSlot(ValueError):
    """Raised for a slot id that is not in the catalog"""

    def __init__(self, slot_id):
        self.slot_id = slot_id
        super().__init__(f"Unknown time slot: {slot_id!r}")


class TimeSlot(str, Enum):
    MORNING = 'morning'
    AFTERNOON = 'afternoon'
    EVENING = 'evening'
    NIGHT = 'night'

    @classmethod
    def parse(cls, value) -> 'TimeSlot':
        """Accept a TimeSlot or its string id, case-insensitively"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidSlot(value)


@dataclass(frozen=True)
class SlotDefinition:
    id: TimeSlot
    label: str
    start_clock: time
    end_clock: time

    @property
    def wraps_midnight(self) -> bool:
        """True when the slot ends on the following calendar day"""
        return self.end_clock <= self.start_clock

    def to_dict(self) -> dict:
        return {
            'id': self.id.value,
            'label': self.label,
            'start': self.start_clock.strftime('%H:%M'),
            'end': self.end_clock.strftime('%H:%M'),
            'wraps_midnight': self.wraps_midnight,
        }


SLOT_CATALOG: Tuple[SlotDefinition, ...] = (
    SlotDefinition(TimeSlot.MORNING, 'Morning Cruise', time(9, 0), time(13, 0)),
    SlotDefinition(TimeSlot.AFTERNOON, 'Afternoon Adventure', time(13, 0), time(17, 0)),
    SlotDefinition(TimeSlot.EVENING, 'Sunset Experience', time(17, 0), time(21, 0)),
    SlotDefinition(TimeSlot.NIGHT, 'Night Party', time(21, 0), time(1, 0)),
)

_BY_ID = {definition.id: definition for definition in SLOT_CATALOG}


def slots() -> Tuple[SlotDefinition, ...]:
    """The four bookable slots in day order"""
    return SLOT_CATALOG


def get_slot(slot_id) -> SlotDefinition:
    return _BY_ID[TimeSlot.parse(slot_id)]


def slot_choices() -> list:
    """(value, label) pairs for model and serializer fields"""
    return [(definition.id.value, definition.label) for definition in SLOT_CATALOG]
