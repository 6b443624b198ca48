from django.apps import AppConfig  # type: ignore


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"
    label = "bookings"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .domain.events import BookingCancelled, BookingCreated
        from .handlers import on_booking_cancelled, on_booking_created

        message_bus.register_event_handler(BookingCreated, on_booking_created)
        message_bus.register_event_handler(BookingCancelled, on_booking_cancelled)
