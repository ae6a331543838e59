"""
Cases app service layer.

All business logic for case creation, administration, status transitions,
remarks and assignment lives here.  Views are thin: they validate input,
call a service, and serialize the result.

Services
--------
- ``CaseQueryService``       — list / retrieve.
- ``CaseCreationService``    — create a case as ``Open``.
- ``CaseAdminService``       — admin metadata edits, assignment, deletion.
- ``CaseWorkflowService``    — ``start`` and ``close`` transitions.
- ``CaseRemarkService``      — append-only remark log.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Prefetch, Q, QuerySet

from core.domain.access import require_admin
from core.domain.exceptions import DomainError, NotFound
from core.domain.transactions import atomic_transition, lock_for_update
from core.domain.validators import require_text
from core.media import MediaUploadAdapter

from .models import Case, CaseRemark, CaseStatus

Staff = get_user_model()
logger = logging.getLogger(__name__)


def _duplicate_case_id(case_id: str) -> DomainError:
    return DomainError(f"Case ID {case_id} already exists.", code="DuplicateCaseId")


# ═══════════════════════════════════════════════════════════════════
#  Query Service
# ═══════════════════════════════════════════════════════════════════


class CaseQueryService:
    """Read-side access to cases.  Every authenticated staff member sees all cases."""

    @staticmethod
    def get_filtered_queryset(filters: dict[str, Any]) -> QuerySet[Case]:
        """
        Cases newest first, optionally filtered.

        ``filters`` may contain:

        - ``status`` — exact status value.
        - ``search`` — case-insensitive substring of ``case_id`` or ``location``.
        """
        qs = Case.objects.select_related("staff")

        status_filter = filters.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)

        search = filters.get("search")
        if search:
            qs = qs.filter(Q(case_id__icontains=search) | Q(location__icontains=search))

        return qs.order_by("-created_at", "-id")

    @staticmethod
    def get_case_detail(case_pk: int) -> Case:
        """
        A single case with its assignee and remark authors loaded.

        Raises:
            NotFound: Unknown ``case_pk``.
        """
        try:
            return (
                Case.objects
                .select_related("staff")
                .prefetch_related(
                    Prefetch("remarks", queryset=CaseRemark.objects.select_related("staff")),
                )
                .get(pk=case_pk)
            )
        except Case.DoesNotExist:
            raise NotFound(f"Case with id {case_pk} not found.")


# ═══════════════════════════════════════════════════════════════════
#  Creation Service
# ═══════════════════════════════════════════════════════════════════


class CaseCreationService:

    @staticmethod
    def create_case(validated_data: dict[str, Any], requesting_user: Staff) -> Case:
        """
        Create an ``Open`` case assigned to its creator.

        Args:
            validated_data:  ``case_id`` and ``location``.
            requesting_user: The authenticated staff member.

        Raises:
            DomainError: ``DuplicateCaseId`` if ``case_id`` is taken.
        """
        case_id = validated_data["case_id"]
        if Case.objects.filter(case_id=case_id).exists():
            raise _duplicate_case_id(case_id)

        try:
            with transaction.atomic():
                case = Case.objects.create(
                    case_id=case_id,
                    location=validated_data["location"],
                    staff=requesting_user,
                    status=CaseStatus.OPEN,
                )
        except IntegrityError:
            raise _duplicate_case_id(case_id)

        logger.info("Case %s (#%d) created by staff #%d", case.case_id, case.pk, requesting_user.pk)
        return CaseQueryService.get_case_detail(case.pk)


# ═══════════════════════════════════════════════════════════════════
#  Admin Service
# ═══════════════════════════════════════════════════════════════════


class CaseAdminService:
    """
    Admin-only mutations other than status transitions.
    """

    @staticmethod
    def update_case(case_pk: int, validated_data: dict[str, Any], performed_by: Staff) -> Case:
        """
        Edit ``case_id`` and/or ``location``.

        Status is never changed here; use ``CaseWorkflowService``.

        Raises:
            NotFound:    Unknown ``case_pk``.
            DomainError: ``DuplicateCaseId`` on collision with another case.
        """
        require_admin(performed_by, "Only admins can edit cases.")

        with transaction.atomic():
            case = lock_for_update(Case, case_pk)
            update_fields = ["updated_at"]

            new_case_id = validated_data.get("case_id")
            if new_case_id and new_case_id != case.case_id:
                if Case.objects.filter(case_id=new_case_id).exclude(pk=case.pk).exists():
                    raise _duplicate_case_id(new_case_id)
                case.case_id = new_case_id
                update_fields.append("case_id")

            new_location = validated_data.get("location")
            if new_location:
                case.location = new_location
                update_fields.append("location")

            case.save(update_fields=update_fields)

        logger.info("Case #%d updated by admin #%d", case.pk, performed_by.pk)
        return CaseQueryService.get_case_detail(case.pk)

    @staticmethod
    def assign_case(case_pk: int, staff_pk: int, performed_by: Staff) -> Case:
        """
        Reassign a case to another staff member.

        Raises:
            NotFound:    Unknown case or staff member.
            DomainError: The staff member is not approved.
        """
        require_admin(performed_by, "Only admins can assign cases.")

        try:
            assignee = Staff.objects.get(pk=staff_pk)
        except Staff.DoesNotExist:
            raise NotFound(f"Staff with id {staff_pk} not found.")
        if not assignee.is_approved:
            raise DomainError("Cases can only be assigned to approved staff.")

        with transaction.atomic():
            case = lock_for_update(Case, case_pk)
            case.staff = assignee
            case.save(update_fields=["staff", "updated_at"])

        logger.info(
            "Case #%d assigned to staff #%d by admin #%d",
            case.pk, assignee.pk, performed_by.pk,
        )
        return CaseQueryService.get_case_detail(case.pk)

    @staticmethod
    def delete_case(case_pk: int, performed_by: Staff) -> None:
        """
        Delete a case together with its evidence and remarks.

        Evidence photos are released from media storage after the rows
        are gone; a failed release leaves an orphaned object but does not
        undo the delete.

        Raises:
            NotFound: Unknown ``case_pk``.
        """
        require_admin(performed_by, "Only admins can delete cases.")

        with transaction.atomic():
            case = lock_for_update(Case, case_pk)
            photos = list(
                case.evidence.exclude(photo__isnull=True)
                .exclude(photo="")
                .values_list("photo", flat=True)
            )
            case.delete()

        media = MediaUploadAdapter()
        for url in photos:
            media.release(url)

        logger.info(
            "Case #%s deleted by admin #%d (%d evidence photo(s) released)",
            case_pk, performed_by.pk, len(photos),
        )


# ═══════════════════════════════════════════════════════════════════
#  Workflow Service
# ═══════════════════════════════════════════════════════════════════


class CaseWorkflowService:
    """
    Status transitions.  Both are admin-only and one-way.
    """

    @staticmethod
    def start_case(case_pk: int, performed_by: Staff) -> Case:
        """
        ``Open → In Progress``.

        Raises:
            NotFound:          Unknown ``case_pk``.
            InvalidTransition: The case is not ``Open``.
        """
        require_admin(performed_by, "Only admins can start cases.")
        case = CaseQueryService.get_case_detail(case_pk)
        atomic_transition(
            instance=case,
            target_status=CaseStatus.IN_PROGRESS,
            allowed_sources={CaseStatus.OPEN},
        )
        logger.info("Case #%d started by admin #%d", case.pk, performed_by.pk)
        return CaseQueryService.get_case_detail(case.pk)

    @staticmethod
    def close_case(case_pk: int, performed_by: Staff) -> Case:
        """
        ``Open | In Progress → Closed``.

        Raises:
            NotFound:    Unknown ``case_pk``.
            DomainError: ``AlreadyClosed`` if the case is closed.
        """
        require_admin(performed_by, "Only admins can close cases.")

        with transaction.atomic():
            case = lock_for_update(Case, case_pk)
            if case.is_closed:
                raise DomainError("Case is already closed.", code="AlreadyClosed")
            case.status = CaseStatus.CLOSED
            case.save(update_fields=["status", "updated_at"])

        logger.info("Case #%d closed by admin #%d", case.pk, performed_by.pk)
        return CaseQueryService.get_case_detail(case.pk)


# ═══════════════════════════════════════════════════════════════════
#  Remark Service
# ═══════════════════════════════════════════════════════════════════


class CaseRemarkService:

    @staticmethod
    def add_remark(case_pk: int, text: str | None, requesting_user: Staff) -> Case:
        """
        Append a remark to a case and return the refreshed case.

        Raises:
            DomainError: ``EmptyRemark`` if ``text`` is blank.
            NotFound:    Unknown ``case_pk``.
        """
        text = require_text(text, code="EmptyRemark", message="Remark text is required.")
        if not Case.objects.filter(pk=case_pk).exists():
            raise NotFound(f"Case with id {case_pk} not found.")

        remark = CaseRemark.objects.create(case_id=case_pk, staff=requesting_user, text=text)
        logger.info("Remark #%d added to case #%s by staff #%d", remark.pk, case_pk, requesting_user.pk)
        return CaseQueryService.get_case_detail(case_pk)
