"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Django implementation of Unit of Work

    Wraps ``transaction.atomic()`` and publishes the recorded domain
    events through ``transaction.on_commit()``.

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = Booking.objects.create(...)
            uow.add_event(BookingCreated(aggregate_id=booking.pk, ...))
        # Events are published after commit
    """

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._bus = bus

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._events.append(event)

    def commit(self):
        """
        Schedule event publishing after commit

        Events are published using Django's transaction.on_commit()
        to ensure they're only sent after database commit succeeds.
        """
        logger.debug("Committing transaction with %d events", len(self._events))

        events = self._events.copy()
        self._events.clear()

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Rollback changes and discard events"""
        if self._events:
            logger.warning("Rolling back transaction, discarding %d events", len(self._events))
        self._events.clear()

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called after successful transaction commit.
        """
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info("Publishing %d domain events after commit", len(events))
        bus.publish_events(events)
