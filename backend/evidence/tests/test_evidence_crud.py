"""
Integration tests — evidence listing, creation, edits, deletion and remarks.

Endpoints under test:
    GET    /api/evidence/
    POST   /api/evidence/
    GET    /api/evidence/{id}/
    PUT    /api/evidence/{id}/       (uploader)
    PATCH  /api/evidence/{id}/       (admin)
    DELETE /api/evidence/{id}/       (admin)
    POST   /api/evidence/{id}/remarks/
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from cases.models import Case
from evidence.models import Evidence, EvidenceRemark

Staff = get_user_model()


class EvidenceTestBase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = Staff.objects.create_user(
            email="admin@example.com", password="pw123456", name="Ada Admin",
            is_admin=True, is_approved=True,
        )
        cls.uploader = Staff.objects.create_user(
            email="uma@example.com", password="pw123456", name="Uma Uploader",
            is_approved=True,
        )
        cls.other = Staff.objects.create_user(
            email="oli@example.com", password="pw123456", name="Oli Other",
            is_approved=True,
        )
        cls.case = Case.objects.create(case_id="CASE-1", location="Harbour", staff=cls.uploader)
        cls.other_case = Case.objects.create(case_id="CASE-2", location="Airport", staff=cls.uploader)

    def setUp(self):
        self.client = APIClient()

    def login_as(self, staff) -> None:
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(staff)}")

    def make_evidence(self, item="Laptop", case=None, uploaded_by=None, **kwargs) -> Evidence:
        defaults = {"description": "Black Dell laptop", "location": "Desk drawer"}
        defaults.update(kwargs)
        return Evidence.objects.create(
            case=case or self.case,
            item=item,
            uploaded_by=uploaded_by or self.uploader,
            **defaults,
        )


class TestEvidenceCreate(EvidenceTestBase):

    def test_create_without_photo(self):
        self.login_as(self.uploader)

        resp = self.client.post(
            reverse("evidence:evidence-list"),
            {
                "caseId": "CASE-1",
                "item": "Laptop",
                "description": "Black Dell laptop",
                "location": "Desk drawer",
            },
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertEqual(resp.data["caseId"], "CASE-1")
        self.assertEqual(resp.data["item"], "Laptop")
        self.assertIsNone(resp.data["photo"])
        self.assertEqual(resp.data["uploadedBy"], self.uploader.pk)
        self.assertEqual(resp.data["remarks"], [])

        evidence = Evidence.objects.get(pk=resp.data["id"])
        self.assertEqual(evidence.case_id, self.case.pk)

    def test_create_for_unknown_case(self):
        self.login_as(self.uploader)

        resp = self.client.post(
            reverse("evidence:evidence-list"),
            {"caseId": "CASE-404", "item": "Knife", "description": "d", "location": "l"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "ValidationError")
        self.assertIn("caseId", resp.data["fields"])
        self.assertFalse(Evidence.objects.exists())

    def test_create_missing_field(self):
        self.login_as(self.uploader)

        resp = self.client.post(
            reverse("evidence:evidence-list"),
            {"caseId": "CASE-1", "item": "Knife", "location": "Kitchen"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "MissingField")
        self.assertIn("description", resp.data["fields"])


class TestEvidenceListing(EvidenceTestBase):

    def test_default_page_size_and_totals(self):
        for i in range(10):
            self.make_evidence(item=f"Item {i}")
        self.login_as(self.other)

        first = self.client.get(reverse("evidence:evidence-list"))
        second = self.client.get(reverse("evidence:evidence-list"), {"page": 2})

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(len(first.data["evidence"]), 6)
        self.assertEqual(first.data["currentPage"], 1)
        self.assertEqual(first.data["totalPages"], 2)
        self.assertEqual(first.data["totalItems"], 10)
        self.assertEqual(len(second.data["evidence"]), 4)

        seen = [row["id"] for row in first.data["evidence"] + second.data["evidence"]]
        self.assertEqual(len(set(seen)), 10)
        self.assertEqual(seen, sorted(seen, reverse=True))

    def test_page_past_the_end_is_empty(self):
        self.make_evidence()
        self.login_as(self.other)

        resp = self.client.get(reverse("evidence:evidence-list"), {"page": 5, "limit": 2})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["evidence"], [])
        self.assertEqual(resp.data["currentPage"], 5)
        self.assertEqual(resp.data["totalPages"], 1)
        self.assertEqual(resp.data["totalItems"], 1)

    def test_empty_table(self):
        self.login_as(self.other)

        resp = self.client.get(reverse("evidence:evidence-list"))

        self.assertEqual(resp.data["evidence"], [])
        self.assertEqual(resp.data["totalPages"], 0)
        self.assertEqual(resp.data["totalItems"], 0)

    def test_invalid_paging_parameters(self):
        self.login_as(self.other)

        for params in ({"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "x"}):
            resp = self.client.get(reverse("evidence:evidence-list"), params)
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, msg=params)
            self.assertEqual(resp.data["error"], "ValidationError")

    def test_search_and_case_filter(self):
        self.make_evidence(item="Laptop", description="Dell")
        self.make_evidence(item="Phone", description="Cracked laptop sleeve inside")
        self.make_evidence(item="Knife", description="Kitchen knife", case=self.other_case)
        self.login_as(self.other)

        resp = self.client.get(reverse("evidence:evidence-list"), {"search": "LAPTOP"})
        self.assertEqual({row["item"] for row in resp.data["evidence"]}, {"Laptop", "Phone"})

        resp = self.client.get(reverse("evidence:evidence-list"), {"caseId": "CASE-2"})
        self.assertEqual([row["item"] for row in resp.data["evidence"]], ["Knife"])
        self.assertEqual(resp.data["evidence"][0]["case"]["caseId"], "CASE-2")

        resp = self.client.get(reverse("evidence:evidence-list"), {"caseId": "CASE-404"})
        self.assertEqual(resp.data["totalItems"], 0)

    def test_retrieve_unknown(self):
        self.login_as(self.other)

        resp = self.client.get(reverse("evidence:evidence-detail", kwargs={"pk": 999}))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"], "NotFound")


class TestEvidenceEdits(EvidenceTestBase):

    def test_uploader_edit_keeps_empty_fields(self):
        evidence = self.make_evidence()
        self.login_as(self.uploader)

        resp = self.client.put(
            reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk}),
            {"item": "Laptop (charger attached)", "description": ""},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["item"], "Laptop (charger attached)")
        self.assertEqual(resp.data["description"], "Black Dell laptop")
        self.assertEqual(resp.data["location"], "Desk drawer")

    def test_only_uploader_may_use_owner_edit(self):
        evidence = self.make_evidence()
        url = reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk})

        for staff in (self.other, self.admin):
            self.login_as(staff)
            resp = self.client.put(url, {"item": "Tampered"}, format="json")
            self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
            self.assertEqual(resp.data["error"], "Unauthorized")

        evidence.refresh_from_db()
        self.assertEqual(evidence.item, "Laptop")

    def test_concurrent_edits_are_last_write_wins_per_field(self):
        evidence = self.make_evidence()
        self.login_as(self.uploader)
        url = reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk})

        self.client.put(url, {"item": "Laptop A"}, format="json")
        self.client.put(url, {"description": "Updated description"}, format="json")
        self.client.put(url, {"item": "Laptop B"}, format="json")

        evidence.refresh_from_db()
        self.assertEqual(evidence.item, "Laptop B")
        self.assertEqual(evidence.description, "Updated description")

    def test_admin_edit_can_move_to_another_case(self):
        evidence = self.make_evidence()
        self.login_as(self.admin)

        resp = self.client.patch(
            reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk}),
            {"caseId": "CASE-2", "location": "Evidence locker"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["caseId"], "CASE-2")
        self.assertEqual(resp.data["location"], "Evidence locker")
        self.assertEqual(resp.data["item"], "Laptop")

    def test_admin_edit_requires_admin(self):
        evidence = self.make_evidence()
        self.login_as(self.uploader)

        resp = self.client.patch(
            reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk}),
            {"item": "Changed"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_delete(self):
        evidence = self.make_evidence()
        url = reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk})

        self.login_as(self.uploader)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.login_as(self.admin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Evidence.objects.filter(pk=evidence.pk).exists())
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_is_audit_logged(self):
        evidence = self.make_evidence()
        self.login_as(self.admin)

        with self.assertLogs("evidence.services", level="INFO") as logs:
            resp = self.client.delete(reverse("evidence:evidence-detail", kwargs={"pk": evidence.pk}))

        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertIn(f"Evidence #{evidence.pk} deleted by admin #{self.admin.pk}", logs.output[-1])


class TestEvidenceRemarks(EvidenceTestBase):

    def test_any_staff_can_remark(self):
        evidence = self.make_evidence()
        self.login_as(self.other)

        resp = self.client.post(
            reverse("evidence:evidence-remarks", kwargs={"pk": evidence.pk}),
            {"text": "Chain of custody signed."},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(len(resp.data["remarks"]), 1)
        self.assertEqual(resp.data["remarks"][0]["staffId"], self.other.pk)

    def test_remark_is_audit_logged(self):
        evidence = self.make_evidence()
        self.login_as(self.other)

        with self.assertLogs("evidence.services", level="INFO") as logs:
            self.client.post(
                reverse("evidence:evidence-remarks", kwargs={"pk": evidence.pk}),
                {"text": "Sealed."},
                format="json",
            )

        remark = EvidenceRemark.objects.get()
        self.assertIn(
            f"Remark #{remark.pk} added to evidence #{evidence.pk} by staff #{self.other.pk}",
            logs.output[-1],
        )

    def test_null_remark_is_empty(self):
        evidence = self.make_evidence()
        self.login_as(self.other)

        resp = self.client.post(
            reverse("evidence:evidence-remarks", kwargs={"pk": evidence.pk}),
            {"text": None},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "EmptyRemark")

    def test_blank_remark(self):
        evidence = self.make_evidence()
        self.login_as(self.other)

        resp = self.client.post(
            reverse("evidence:evidence-remarks", kwargs={"pk": evidence.pk}),
            {"text": ""},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"], "EmptyRemark")
        self.assertFalse(EvidenceRemark.objects.exists())


class TestCaseAndEvidenceTogether(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = Staff.objects.create_user(
            email="admin@example.com", password="pw123456", name="Ada Admin",
            is_admin=True, is_approved=True,
        )

    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.admin)}")

    def test_laptop_logged_against_new_case(self):
        resp = self.client.post(
            reverse("cases:case-list"), {"caseId": "CASE-1", "location": "Lab A"}, format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        resp = self.client.post(
            reverse("evidence:evidence-list"),
            {"item": "Laptop", "description": "Seized laptop", "location": "Lab A", "caseId": "CASE-1"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertIsNone(resp.data["photo"])
        self.assertEqual(resp.data["caseId"], "CASE-1")
        self.assertEqual(resp.data["case"]["caseId"], "CASE-1")

    def test_listing_by_case_is_empty_after_case_delete(self):
        case = Case.objects.create(case_id="CASE-1", location="Lab A", staff=self.admin)
        for item in ("Laptop", "Phone"):
            Evidence.objects.create(
                case=case, item=item, description="d", location="Lab A", uploaded_by=self.admin,
            )

        self.client.delete(reverse("cases:case-detail", kwargs={"pk": case.pk}))
        resp = self.client.get(reverse("evidence:evidence-list"), {"caseId": "CASE-1"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["evidence"], [])
        self.assertEqual(resp.data["totalItems"], 0)
