"""
Booking Domain Events

Published through the message bus after the booking transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A member booked a yacht slot

    Triggers:
    - Notify club admins
    - Notify the yacht owner
    """
    booking_id: int = 0
    yacht_id: int = 0
    user_id: int = 0
    booking_date: date | None = None
    slot: str = ''


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: A booking was cancelled and its slot released
    """
    booking_id: int = 0
    yacht_id: int = 0
    user_id: int = 0
    booking_date: date | None = None
    slot: str = ''
    reason: str = ''
