"""Admin site behaviour for bookings."""

from __future__ import annotations

from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.bookings.models import Booking
from apps.bookings.services import get_time_resolver
from apps.users.models import User
from apps.yachts.models import Yacht


class BookingAdminTest(TestCase):
    def setUp(self):
        self.superuser = User.objects.create_superuser(email="root@example.com", password="RootPass123")
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.yacht = Yacht.objects.create(name="Sea Breeze", location="Marina Bay", size=40, capacity=8)
        self.booking_date = timezone.localdate() + timedelta(days=5)
        window = get_time_resolver().resolve(self.booking_date, "morning")
        self.booking = Booking.objects.create(
            user=self.member,
            yacht=self.yacht,
            booking_date=self.booking_date,
            slot="morning",
            start_time=window.start,
            end_time=window.end,
            guest_count=2,
        )
        self.client.force_login(self.superuser)

    def test_change_form_keeps_slot_and_window(self):
        url = reverse("admin:bookings_booking_change", args=[self.booking.pk])
        original_start = self.booking.start_time

        response = self.client.post(
            url,
            {
                "slot": "night",
                "booking_date": str(self.booking_date + timedelta(days=1)),
                "guest_count": 3,
                "special_requests": "Champagne on deck",
                "_save": "Save",
            },
        )

        self.assertEqual(response.status_code, 302)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.slot, "morning")
        self.assertEqual(self.booking.booking_date, self.booking_date)
        self.assertEqual(self.booking.start_time, original_start)
        self.assertEqual(self.booking.guest_count, 3)
        self.assertEqual(self.booking.special_requests, "Champagne on deck")

    def test_add_page_is_disabled(self):
        response = self.client.get(reverse("admin:bookings_booking_add"))
        self.assertEqual(response.status_code, 403)

    def test_cancel_action_releases_slot(self):
        response = self.client.post(
            reverse("admin:bookings_booking_changelist"),
            {"action": "cancel_selected", "_selected_action": [self.booking.pk]},
        )

        self.assertEqual(response.status_code, 302)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.CANCELLED)
        self.assertEqual(self.booking.cancellation_reason, "Cancelled by club administration")
        self.assertIsNotNone(self.booking.cancelled_at)
