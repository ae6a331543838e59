"""
Evidence app Service Layer.

This module is the **single source of truth** for all business logic
in the ``evidence`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``EvidenceQueryService``      — filtered, paginated listing & retrieval.
- ``EvidenceProcessingService`` — create, uploader edit, admin edit, delete.
- ``EvidenceRemarkService``     — append-only remark log.

Photos go through ``core.media.MediaUploadAdapter``: the file is stored
first and only its URL is written to the row.  Replaced or deleted photos
are released after the row change, best-effort.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import Prefetch, Q, QuerySet

from core.domain.access import require_admin, require_owner
from core.domain.exceptions import NotFound
from core.domain.validators import require_text
from core.media import EVIDENCE_FOLDER, EVIDENCE_UPLOAD_TYPES, MediaUploadAdapter
from core.pagination import DEFAULT_PAGE_SIZE, PageWindow, paginate_queryset

from .models import Evidence, EvidenceRemark

logger = logging.getLogger(__name__)

# Fields the uploader may change through the non-admin edit path
_OWNER_EDITABLE_FIELDS = ("item", "description", "location")


def _store_photo(photo: UploadedFile) -> str:
    return MediaUploadAdapter().store(
        photo,
        folder=EVIDENCE_FOLDER,
        allowed_types=EVIDENCE_UPLOAD_TYPES,
    )


def _apply_non_empty(evidence: Evidence, data: dict[str, Any], fields) -> list[str]:
    """Copy the non-empty values of ``fields`` from ``data``; return what changed."""
    changed = []
    for field in fields:
        value = data.get(field)
        if value in (None, ""):
            continue
        setattr(evidence, field, value)
        changed.append(field)
    return changed


# ═══════════════════════════════════════════════════════════════════
#  Query Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceQueryService:
    """
    Builds filtered querysets for evidence listing and retrieves single
    items.  All authenticated staff see all evidence.
    """

    @staticmethod
    def get_filtered_queryset(filters: dict[str, Any]) -> QuerySet[Evidence]:
        """
        Evidence newest first (id as tiebreaker), optionally filtered.

        ``filters`` may contain:

        - ``search``  — case-insensitive substring of ``item`` or ``description``.
        - ``case_id`` — the human case identifier (``Case.case_id``).
        """
        qs = Evidence.objects.select_related("case", "uploaded_by")

        search = filters.get("search")
        if search:
            qs = qs.filter(Q(item__icontains=search) | Q(description__icontains=search))

        case_id = filters.get("case_id")
        if case_id:
            qs = qs.filter(case__case_id=case_id)

        return qs.order_by("-created_at", "-id")

    @classmethod
    def list_page(cls, filters: dict[str, Any]) -> PageWindow:
        """
        One page of filtered evidence.

        ``page`` past the last page yields an empty window that still
        reports the requested ``current_page``.
        """
        return paginate_queryset(
            cls.get_filtered_queryset(filters),
            page=filters.get("page", 1),
            limit=filters.get("limit", DEFAULT_PAGE_SIZE),
        )

    @staticmethod
    def get_evidence_detail(pk: int) -> Evidence:
        """
        Raises:
            NotFound: Unknown ``pk``.
        """
        try:
            return (
                Evidence.objects
                .select_related("case", "uploaded_by")
                .prefetch_related(
                    Prefetch("remarks", queryset=EvidenceRemark.objects.select_related("staff")),
                )
                .get(pk=pk)
            )
        except Evidence.DoesNotExist:
            raise NotFound(f"Evidence with id {pk} not found.")


# ═══════════════════════════════════════════════════════════════════
#  Processing Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceProcessingService:
    """
    Creation, updates and deletion of evidence items.

    Concurrent edits of the same item are last-write-wins: each update
    writes only the fields it changes, with no version check.
    """

    @staticmethod
    def create_evidence(
        validated_data: dict[str, Any],
        requesting_user: Any,
        photo: UploadedFile | None = None,
    ) -> Evidence:
        """
        Create an evidence item for an existing case.

        Args:
            validated_data:  ``case`` (a ``Case``), ``item``,
                             ``description``, ``location``.
            requesting_user: Recorded as ``uploaded_by``.
            photo:           Optional upload; stored before the row is
                             written.

        Raises:
            DomainError:   ``UnsupportedType`` / ``TooLarge`` for a bad photo.
            UpstreamError: The storage backend failed.
        """
        photo_url = _store_photo(photo) if photo is not None else None

        try:
            evidence = Evidence.objects.create(
                case=validated_data["case"],
                item=validated_data["item"],
                description=validated_data["description"],
                location=validated_data["location"],
                photo=photo_url,
                uploaded_by=requesting_user,
            )
        except Exception:
            # Nothing references the stored file yet
            MediaUploadAdapter().release(photo_url)
            raise

        logger.info(
            "Evidence #%d created for Case %s by staff #%d (photo: %s)",
            evidence.pk,
            evidence.case.case_id,
            requesting_user.pk,
            "yes" if photo_url else "no",
        )
        return EvidenceQueryService.get_evidence_detail(evidence.pk)

    @staticmethod
    def update_own_evidence(pk: int, validated_data: dict[str, Any], requesting_user: Any) -> Evidence:
        """
        Uploader edit of ``item``, ``description`` and ``location``.

        Empty values keep the current value.

        Raises:
            NotFound:         Unknown ``pk``.
            PermissionDenied: ``Unauthorized`` when the caller did not
                              upload the item.
        """
        with transaction.atomic():
            try:
                evidence = Evidence.objects.select_for_update().get(pk=pk)
            except Evidence.DoesNotExist:
                raise NotFound(f"Evidence with id {pk} not found.")

            require_owner(
                requesting_user,
                evidence.uploaded_by_id,
                "Unauthorized to update this evidence.",
            )

            update_fields = _apply_non_empty(evidence, validated_data, _OWNER_EDITABLE_FIELDS)
            if update_fields:
                evidence.save(update_fields=update_fields + ["updated_at"])

        logger.info(
            "Evidence #%d updated by uploader #%d (fields: %s)",
            evidence.pk, requesting_user.pk, ", ".join(update_fields) or "none",
        )
        return EvidenceQueryService.get_evidence_detail(evidence.pk)

    @staticmethod
    def update_evidence_as_admin(
        pk: int,
        validated_data: dict[str, Any],
        requesting_user: Any,
        photo: UploadedFile | None = None,
    ) -> Evidence:
        """
        Admin edit of any field, including the owning case and the photo.

        A new photo is stored first; the previous one is released only
        after the row points at the new URL.

        Raises:
            NotFound:      Unknown ``pk``.
            DomainError:   ``UnsupportedType`` / ``TooLarge`` for a bad photo.
            UpstreamError: The storage backend failed.
        """
        require_admin(requesting_user, "Only admins can edit any evidence.")

        if not Evidence.objects.filter(pk=pk).exists():
            raise NotFound(f"Evidence with id {pk} not found.")

        new_photo_url = _store_photo(photo) if photo is not None else None
        old_photo_url = None

        with transaction.atomic():
            evidence = Evidence.objects.select_for_update().get(pk=pk)
            update_fields = _apply_non_empty(evidence, validated_data, _OWNER_EDITABLE_FIELDS)

            new_case = validated_data.get("case")
            if new_case is not None and new_case.pk != evidence.case_id:
                evidence.case = new_case
                update_fields.append("case")

            if new_photo_url is not None:
                old_photo_url = evidence.photo
                evidence.photo = new_photo_url
                update_fields.append("photo")

            if update_fields:
                evidence.save(update_fields=update_fields + ["updated_at"])

        if old_photo_url:
            MediaUploadAdapter().release(old_photo_url)

        logger.info(
            "Evidence #%d updated by admin #%d (fields: %s)",
            evidence.pk, requesting_user.pk, ", ".join(update_fields) or "none",
        )
        return EvidenceQueryService.get_evidence_detail(evidence.pk)

    @staticmethod
    def delete_evidence(pk: int, requesting_user: Any) -> None:
        """
        Delete an evidence item and release its photo.

        The delete stands even if the photo cannot be released.

        Raises:
            NotFound: Unknown ``pk``.
        """
        require_admin(requesting_user, "Only admins can delete evidence.")

        with transaction.atomic():
            try:
                evidence = Evidence.objects.select_for_update().get(pk=pk)
            except Evidence.DoesNotExist:
                raise NotFound(f"Evidence with id {pk} not found.")
            photo_url = evidence.photo
            evidence.delete()

        released = MediaUploadAdapter().release(photo_url) if photo_url else False

        logger.info(
            "Evidence #%s deleted by admin #%d (photo released: %s)",
            pk, requesting_user.pk, released,
        )


# ═══════════════════════════════════════════════════════════════════
#  Remark Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceRemarkService:

    @staticmethod
    def add_remark(pk: int, text: str | None, requesting_user: Any) -> Evidence:
        """
        Append a remark and return the refreshed evidence item.

        Raises:
            DomainError: ``EmptyRemark`` if ``text`` is blank.
            NotFound:    Unknown ``pk``.
        """
        text = require_text(text, code="EmptyRemark", message="Remark text is required.")
        if not Evidence.objects.filter(pk=pk).exists():
            raise NotFound(f"Evidence with id {pk} not found.")

        remark = EvidenceRemark.objects.create(evidence_id=pk, staff=requesting_user, text=text)
        logger.info("Remark #%d added to evidence #%s by staff #%d", remark.pk, pk, requesting_user.pk)
        return EvidenceQueryService.get_evidence_detail(pk)
