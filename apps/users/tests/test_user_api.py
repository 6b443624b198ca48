"""Integration tests for the users API."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.member = User.objects.create_user(
            email="Member@Example.com",
            password="MemberPass123",
            username="captain_jack",
            phone="+1 555-010-9999",
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )

    def test_manager_defaults(self) -> None:
        self.assertEqual(self.member.role, User.RoleChoices.MEMBER)
        self.assertEqual(self.member.membership_tier, User.MembershipTier.BRONZE)
        self.assertEqual(self.member.phone, "+15550109999")
        self.assertEqual(self.member.email, "Member@example.com")

    def test_superuser_is_club_admin(self) -> None:
        root = User.objects.create_superuser(email="root@example.com", password="RootPass123")
        self.assertEqual(root.role, User.RoleChoices.ADMIN)
        self.assertTrue(root.is_club_admin())

    def test_me_returns_current_user(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["display_name"], "captain_jack")
        self.assertEqual(response.data["max_yacht_size"], 45)

    def test_platinum_has_no_size_limit(self) -> None:
        self.member.membership_tier = User.MembershipTier.PLATINUM
        self.member.save()
        self.client.force_authenticate(self.member)

        response = self.client.get(reverse("user-me"))

        self.assertIsNone(response.data["max_yacht_size"])

    def test_member_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_lists_users(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("user-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_member_cannot_raise_own_tier(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.patch(
            reverse("user-detail", args=[self.member.pk]),
            {"first_name": "Jack", "membership_tier": "platinum"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.member.refresh_from_db()
        self.assertEqual(self.member.first_name, "Jack")
        self.assertEqual(self.member.membership_tier, User.MembershipTier.BRONZE)

    def test_jwt_login_by_email(self) -> None:
        response = self.client.post(
            reverse("token-obtain"),
            {"email": "Member@example.com", "password": "MemberPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)
