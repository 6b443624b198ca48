from datetime import date

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.bookings.services import create_booking
from apps.notifications.models import Notification
from apps.notifications.services import create_in_app_notification, notify_booking_created
from apps.users.models import User
from apps.yachts.models import Yacht


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def member(db):
    return User.objects.create_user(email="member@example.com", password="pass", username="captain_jack")


@pytest.mark.django_db
def test_booking_notifications_reach_admins_and_owner_once(member):
    owner_admin = User.objects.create_user(
        email="owner@example.com",
        password="pass",
        role=User.RoleChoices.ADMIN,
    )
    staff = User.objects.create_user(email="staff@example.com", password="pass", is_staff=True)
    User.objects.create_user(email="gone@example.com", password="pass", is_staff=True, is_active=False)
    yacht = Yacht.objects.create(name="Sea Breeze", location="Marina Bay", size=40, capacity=6, owner=owner_admin)
    booking = create_booking(member, yacht, date(2025, 7, 4), "evening")

    notifications = notify_booking_created(booking)

    assert sorted(n.user_id for n in notifications) == sorted([owner_admin.pk, staff.pk])
    assert all(n.title == "New Yacht Booking" for n in notifications)
    assert notifications[0].message == "captain_jack booked Sea Breeze for the Sunset Experience on July 04, 2025."
    assert notifications[0].data["slot"] == "evening"


@pytest.mark.django_db
def test_user_lists_only_own_notifications(api_client, member):
    other = User.objects.create_user(email="other@example.com", password="pass")
    mine = create_in_app_notification(member, "Welcome aboard", "Your membership is active.")
    create_in_app_notification(other, "Hello", "Not yours.")
    api_client.force_authenticate(member)

    response = api_client.get(reverse("notification-list"))

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.data] == [mine.pk]


@pytest.mark.django_db
def test_mark_read(api_client, member):
    notification = create_in_app_notification(member, "Welcome aboard", "Your membership is active.")
    api_client.force_authenticate(member)

    response = api_client.post(reverse("notification-mark-read", args=[notification.pk]))

    assert response.status_code == status.HTTP_200_OK
    notification.refresh_from_db()
    assert notification.is_read


@pytest.mark.django_db
def test_cannot_mark_someone_elses_notification(api_client, member):
    other = User.objects.create_user(email="other@example.com", password="pass")
    notification = create_in_app_notification(other, "Hello", "Not yours.")
    api_client.force_authenticate(member)

    response = api_client.post(reverse("notification-mark-read", args=[notification.pk]))

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
def test_mark_all_read(api_client, member):
    create_in_app_notification(member, "One", "First")
    create_in_app_notification(member, "Two", "Second")
    api_client.force_authenticate(member)

    response = api_client.post(reverse("notification-mark-all-read"))

    assert response.data == {"updated": 2}
    assert not Notification.objects.filter(is_read=False).exists()
