"""
Cases app serializers.

Request serializers validate shape only; uniqueness, status rules and
blank-remark checks are enforced in ``services.py``.  Response JSON uses
camelCase keys (``caseId``, ``staffId``).
"""

from __future__ import annotations

from rest_framework import serializers

from accounts.serializers import StaffRefSerializer

from .models import Case, CaseRemark, CaseStatus


# ═══════════════════════════════════════════════════════════════════
#  Request Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseFilterSerializer(serializers.Serializer):
    """Query parameters for ``GET /api/cases/``."""

    status = serializers.ChoiceField(choices=CaseStatus.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class CaseCreateSerializer(serializers.Serializer):
    caseId = serializers.CharField(source="case_id", max_length=100)
    location = serializers.CharField(max_length=500)


class CaseUpdateSerializer(serializers.Serializer):
    """Admin metadata edit; absent or empty fields keep their value."""

    caseId = serializers.CharField(source="case_id", max_length=100, required=False, allow_blank=True)
    location = serializers.CharField(max_length=500, required=False, allow_blank=True)


class RemarkCreateSerializer(serializers.Serializer):
    """Shared by case and evidence remarks.  Blank text is rejected by the service."""

    text = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False, default="")


class CaseAssignSerializer(serializers.Serializer):
    staffId = serializers.IntegerField(source="staff_id", min_value=1)


# ═══════════════════════════════════════════════════════════════════
#  Response Serializers
# ═══════════════════════════════════════════════════════════════════


class RemarkSerializer(serializers.ModelSerializer):
    """Works for any concrete ``core.models.Remark``."""

    staffId = serializers.IntegerField(source="staff_id", read_only=True, allow_null=True)
    staff = StaffRefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = CaseRemark
        fields = ["id", "staffId", "staff", "text", "timestamp"]
        read_only_fields = fields


class CaseListSerializer(serializers.ModelSerializer):
    caseId = serializers.CharField(source="case_id", read_only=True)
    staffId = serializers.IntegerField(source="staff_id", read_only=True, allow_null=True)
    staff = StaffRefSerializer(read_only=True, allow_null=True)

    class Meta:
        model = Case
        fields = ["id", "caseId", "status", "date", "location", "staffId", "staff"]
        read_only_fields = fields


class CaseDetailSerializer(CaseListSerializer):
    remarks = RemarkSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(CaseListSerializer.Meta):
        fields = CaseListSerializer.Meta.fields + ["remarks", "createdAt", "updatedAt"]
        read_only_fields = fields
