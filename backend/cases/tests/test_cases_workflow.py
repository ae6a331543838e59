"""
Integration tests — case status transitions.

    Open ──start──▶ In Progress ──close──▶ Closed
      └──────────────close──────────────────┘
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from cases.models import Case, CaseStatus

Staff = get_user_model()


class TestCaseWorkflow(TestCase):

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

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.admin)}")
        self.case = Case.objects.create(case_id="CASE-1", location="Harbour", staff=self.staff)

    def _start(self):
        return self.client.patch(reverse("cases:case-start", kwargs={"pk": self.case.pk}))

    def _close(self):
        return self.client.patch(reverse("cases:case-close", kwargs={"pk": self.case.pk}))

    def test_start_then_close(self):
        resp = self._start()
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["status"], CaseStatus.IN_PROGRESS)

        resp = self._close()
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["status"], CaseStatus.CLOSED)

    def test_close_directly_from_open(self):
        resp = self._close()

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.case.refresh_from_db()
        self.assertEqual(self.case.status, CaseStatus.CLOSED)

    def test_close_twice(self):
        self._close()

        resp = self._close()

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "AlreadyClosed")

    def test_start_only_from_open(self):
        self._start()

        resp = self._start()
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"], "InvalidTransition")

        self._close()
        resp = self._start()
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.case.refresh_from_db()
        self.assertEqual(self.case.status, CaseStatus.CLOSED)

    def test_transitions_require_admin(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.staff)}")

        self.assertEqual(self._start().status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self._close().status_code, status.HTTP_403_FORBIDDEN)
        self.case.refresh_from_db()
        self.assertEqual(self.case.status, CaseStatus.OPEN)

    def test_transition_on_unknown_case(self):
        resp = self.client.patch(reverse("cases:case-close", kwargs={"pk": 999}))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
