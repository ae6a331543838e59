"""
Integration tests — admin staff management and the token guard.

Endpoints under test:
    GET    /api/auth/profile/
    GET    /api/auth/staff/
    GET    /api/auth/pending/
    PATCH  /api/auth/approve/{id}/
    PATCH  /api/auth/staff/{id}/
    DELETE /api/auth/staff/{id}/
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

Staff = get_user_model()


def _bearer(staff) -> str:
    return f"Bearer {AccessToken.for_user(staff)}"


class TestStaffManagement(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = Staff.objects.create_user(
            email="admin@example.com", password="pw123456", name="Ada Admin",
            is_admin=True, is_approved=True,
        )
        cls.staff = Staff.objects.create_user(
            email="sam@example.com", password="pw123456", name="Sam Staff",
            is_approved=True,
        )
        cls.pending = Staff.objects.create_user(
            email="pat@example.com", password="pw123456", name="Pat Pending",
        )

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION=_bearer(self.admin))

    def test_list_staff_returns_everyone(self):
        resp = self.client.get(reverse("accounts:staff-list"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        emails = {row["email"] for row in resp.data}
        self.assertEqual(emails, {"admin@example.com", "sam@example.com", "pat@example.com"})

    def test_pending_lists_only_unapproved(self):
        resp = self.client.get(reverse("accounts:staff-pending"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([row["email"] for row in resp.data], ["pat@example.com"])

    def test_approve_defaults_to_true(self):
        resp = self.client.patch(
            reverse("accounts:staff-approve", args=[self.pending.pk]), {}, format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertIs(resp.data["isApproved"], True)
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.is_approved)

    def test_unapprove(self):
        resp = self.client.patch(
            reverse("accounts:staff-approve", args=[self.staff.pk]),
            {"isApproved": False},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.staff.refresh_from_db()
        self.assertFalse(self.staff.is_approved)

    def test_admin_approval_cannot_be_modified(self):
        resp = self.client.patch(
            reverse("accounts:staff-approve", args=[self.admin.pk]),
            {"isApproved": False},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.is_approved)

    def test_approve_unknown_staff_is_not_found(self):
        resp = self.client.patch(reverse("accounts:staff-approve", args=[999999]), {}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"], "NotFound")

    def test_update_staff_fields(self):
        resp = self.client.patch(
            reverse("accounts:staff-detail", args=[self.staff.pk]),
            {"name": "Samantha Staff", "isAdmin": True},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["name"], "Samantha Staff")
        self.assertIs(resp.data["isAdmin"], True)
        self.assertEqual(resp.data["email"], "sam@example.com")

    def test_update_to_taken_email_is_duplicate(self):
        resp = self.client.patch(
            reverse("accounts:staff-detail", args=[self.staff.pk]),
            {"email": "pat@example.com"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "DuplicateEmail")

    def test_delete_staff(self):
        resp = self.client.delete(reverse("accounts:staff-detail", args=[self.pending.pk]))

        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Staff.objects.filter(pk=self.pending.pk).exists())

    def test_admin_cannot_delete_self(self):
        resp = self.client.delete(reverse("accounts:staff-detail", args=[self.admin.pk]))

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Staff.objects.filter(pk=self.admin.pk).exists())


class TestAuthorizationGuard(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.staff = Staff.objects.create_user(
            email="sam@example.com", password="pw123456", name="Sam Staff",
            is_approved=True,
        )

    def setUp(self):
        self.client = APIClient()

    def test_anonymous_on_admin_route_is_unauthenticated(self):
        resp = self.client.get(reverse("accounts:staff-list"))

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["error"], "Unauthenticated")

    def test_non_admin_on_admin_route_is_forbidden(self):
        self.client.credentials(HTTP_AUTHORIZATION=_bearer(self.staff))

        resp = self.client.get(reverse("accounts:staff-list"))

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.data["error"], "Forbidden")

    def test_garbage_token_is_invalid_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")

        resp = self.client.get(reverse("accounts:profile"))

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["error"], "InvalidToken")

    def test_profile_returns_own_record(self):
        self.client.credentials(HTTP_AUTHORIZATION=_bearer(self.staff))

        resp = self.client.get(reverse("accounts:profile"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["email"], "sam@example.com")
        self.assertEqual(resp.data["name"], "Sam Staff")

    def test_token_stops_working_once_unapproved(self):
        header = _bearer(self.staff)
        Staff.objects.filter(pk=self.staff.pk).update(is_approved=False)
        self.client.credentials(HTTP_AUTHORIZATION=header)

        resp = self.client.get(reverse("accounts:profile"))

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["error"], "InvalidToken")

    def test_token_stops_working_once_staff_deleted(self):
        doomed = Staff.objects.create_user(
            email="gone@example.com", password="pw123456", name="Gone", is_approved=True,
        )
        header = _bearer(doomed)
        doomed.delete()
        self.client.credentials(HTTP_AUTHORIZATION=header)

        resp = self.client.get(reverse("accounts:profile"))

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["error"], "InvalidToken")

    def test_admin_flag_is_reread_on_every_request(self):
        header = _bearer(self.staff)
        Staff.objects.filter(pk=self.staff.pk).update(is_admin=True)
        self.client.credentials(HTTP_AUTHORIZATION=header)

        resp = self.client.get(reverse("accounts:staff-list"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
