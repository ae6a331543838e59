"""
Evidence app serializers.

``caseId`` in requests and responses is the *human* case identifier
(``Case.case_id``), not the database key.  Request serializers resolve it
to a ``Case`` and reject unknown identifiers, so an evidence item can
never point at a missing case.
"""

from __future__ import annotations

from rest_framework import serializers

from accounts.serializers import StaffRefSerializer
from cases.models import Case
from cases.serializers import RemarkSerializer
from core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

from .models import Evidence, EvidenceRemark


# ═══════════════════════════════════════════════════════════════════
#  Request Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceFilterSerializer(serializers.Serializer):
    """Query parameters for ``GET /api/evidence/``."""

    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_PAGE_SIZE, required=False, default=DEFAULT_PAGE_SIZE,
    )
    search = serializers.CharField(required=False, allow_blank=True)
    caseId = serializers.CharField(source="case_id", required=False, allow_blank=True)


class _CaseRefField(serializers.SlugRelatedField):
    """``caseId`` → ``Case`` by its human identifier."""

    default_error_messages = {
        "does_not_exist": "Case {value} does not exist.",
        "invalid": "Invalid case ID.",
    }

    def __init__(self, **kwargs):
        super().__init__(slug_field="case_id", queryset=Case.objects.all(), **kwargs)

    def to_internal_value(self, data):
        try:
            return self.get_queryset().get(**{self.slug_field: data})
        except Case.DoesNotExist:
            self.fail("does_not_exist", value=str(data))
        except (TypeError, ValueError):
            self.fail("invalid")


class EvidenceCreateSerializer(serializers.Serializer):
    """Multipart (with ``photo``) or JSON (without)."""

    caseId = _CaseRefField(source="case")
    item = serializers.CharField(max_length=255)
    description = serializers.CharField()
    location = serializers.CharField(max_length=500)
    photo = serializers.FileField(required=False, allow_null=True, write_only=True)


class EvidenceOwnerUpdateSerializer(serializers.Serializer):
    """Uploader edit; empty values keep the current value."""

    item = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=500, required=False, allow_blank=True)


class EvidenceAdminUpdateSerializer(EvidenceOwnerUpdateSerializer):
    """Admin edit; may also move the item to another case or replace its photo."""

    caseId = _CaseRefField(source="case", required=False, allow_null=True)
    photo = serializers.FileField(required=False, allow_null=True, write_only=True)


# ═══════════════════════════════════════════════════════════════════
#  Response Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceRemarkSerializer(RemarkSerializer):

    class Meta(RemarkSerializer.Meta):
        model = EvidenceRemark


class EvidenceCaseRefSerializer(serializers.ModelSerializer):
    caseId = serializers.CharField(source="case_id", read_only=True)

    class Meta:
        model = Case
        fields = ["id", "caseId", "status"]
        read_only_fields = fields


class EvidenceListSerializer(serializers.ModelSerializer):
    caseId = serializers.CharField(source="case.case_id", read_only=True)
    case = EvidenceCaseRefSerializer(read_only=True)
    uploadedBy = serializers.IntegerField(source="uploaded_by_id", read_only=True, allow_null=True)
    uploader = StaffRefSerializer(source="uploaded_by", read_only=True, allow_null=True)
    timestamp = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Evidence
        fields = [
            "id", "caseId", "case", "item", "description", "location",
            "photo", "uploadedBy", "uploader", "timestamp",
        ]
        read_only_fields = fields


class EvidenceDetailSerializer(EvidenceListSerializer):
    remarks = EvidenceRemarkSerializer(many=True, read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(EvidenceListSerializer.Meta):
        fields = EvidenceListSerializer.Meta.fields + ["remarks", "updatedAt"]
        read_only_fields = fields


class EvidencePageSerializer(serializers.Serializer):
    """``{evidence, currentPage, totalPages, totalItems}``."""

    evidence = EvidenceListSerializer(source="items", many=True, read_only=True)
    currentPage = serializers.IntegerField(source="current_page", read_only=True)
    totalPages = serializers.IntegerField(source="total_pages", read_only=True)
    totalItems = serializers.IntegerField(source="total_items", read_only=True)
