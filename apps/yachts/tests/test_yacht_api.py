"""Integration tests for the fleet API."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User
from apps.yachts.models import Yacht


class YachtAPITests(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(email="member@example.com", password="MemberPass123")
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.YACHT_OWNER,
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.sea_breeze = Yacht.objects.create(
            name="Sea Breeze", location="Marina Bay", size=42, capacity=8, amenities=["Bluetooth audio"]
        )
        self.docked = Yacht.objects.create(
            name="Dry Dock", location="Harbor Point", size=38, capacity=4, owner=self.owner, is_available=False
        )
        self.ocean_queen = Yacht.objects.create(name="Ocean Queen", location="Harbor Point", size=65, capacity=12)
        self.list_url = reverse("yacht-list")

    def _names(self, response) -> list[str]:
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        return [item["name"] for item in response.data]

    def test_member_sees_available_fleet(self) -> None:
        self.client.force_authenticate(self.member)

        self.assertEqual(self._names(self.client.get(self.list_url)), ["Ocean Queen", "Sea Breeze"])

    def test_owner_also_sees_own_docked_yacht(self) -> None:
        self.client.force_authenticate(self.owner)

        self.assertEqual(self._names(self.client.get(self.list_url)), ["Dry Dock", "Ocean Queen", "Sea Breeze"])

    def test_filters(self) -> None:
        self.client.force_authenticate(self.member)

        self.assertEqual(self._names(self.client.get(self.list_url, {"size_max": 45})), ["Sea Breeze"])
        self.assertEqual(self._names(self.client.get(self.list_url, {"location": "harbor"})), ["Ocean Queen"])
        self.assertEqual(self._names(self.client.get(self.list_url, {"guests": 10})), ["Ocean Queen"])

    def test_member_cannot_add_yachts(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.post(
            self.list_url, {"name": "Pirate", "location": "Cove", "size": 30, "capacity": 4}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_adds_yacht(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"name": "Wind Dancer", "location": "Cove", "size": 50, "capacity": 10, "owner": self.owner.pk},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Yacht.objects.get(name="Wind Dancer").owner, self.owner)

    def test_amenities_must_be_strings(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"name": "Odd", "location": "Cove", "size": 30, "capacity": 4, "amenities": [1, 2]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_anonymous_is_rejected(self) -> None:
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_401_UNAUTHORIZED)
