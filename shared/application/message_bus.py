"""
Message Bus

Central hub for routing domain events to their handlers.
Apps register handlers in their AppConfig.ready().
"""

from typing import Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message bus for domain events

    Events: Multiple handlers per event (1:N)
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_event_handler(
        self,
        event_type: Type[DomainEvent],
        handler: Callable[[DomainEvent], None]
    ):
        """
        Register an event handler

        Multiple handlers can be registered for the same event type.
        Registering the same handler twice is a no-op.
        """
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Registered event handler for %s", event_type.__name__)

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        All registered handlers for each event type will be called.
        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.warning("No handlers registered for event %s", event_type.__name__)
                continue

            logger.info("Publishing event: %s (ID: %s)", event_type.__name__, event.event_id)

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.error(
                        "Error in event handler %s for event %s",
                        getattr(handler, "__name__", repr(handler)),
                        event_type.__name__,
                        exc_info=True,
                    )
                    # Don't raise - other handlers should still run


# Global message bus instance
message_bus = MessageBus()
