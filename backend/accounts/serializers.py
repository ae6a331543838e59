"""
Accounts app serializers.

Request and response serializers for the auth and staff-management API.
JSON keys are camelCase (``isAdmin``, ``isApproved``); the Python side
keeps snake_case through ``source=``.  **No business logic** lives here:
uniqueness, approval and bootstrap rules are enforced in ``services.py``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

Staff = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class RegisterRequestSerializer(serializers.Serializer):
    """Public self-registration.  The account starts unapproved."""

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={"input_type": "password"},
    )


class RegisterAdminRequestSerializer(RegisterRequestSerializer):
    """Bootstrap-admin registration; ``secret`` must equal ``ADMIN_SECRET``."""

    secret = serializers.CharField(
        write_only=True,
        allow_blank=True,
        style={"input_type": "password"},
    )


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={"input_type": "password"},
    )


class TokenResponseSerializer(serializers.Serializer):
    """Shape of the login / bootstrap-admin response (documentation only)."""

    token = serializers.CharField(help_text="JWT access token.")
    refresh = serializers.CharField(help_text="JWT refresh token.")
    email = serializers.EmailField()
    isAdmin = serializers.BooleanField(source="is_admin")


# ═══════════════════════════════════════════════════════════════════
#  Staff Serializers
# ═══════════════════════════════════════════════════════════════════


class StaffSerializer(serializers.ModelSerializer):
    """Full staff representation for the profile and admin endpoints."""

    isAdmin = serializers.BooleanField(source="is_admin", read_only=True)
    isApproved = serializers.BooleanField(source="is_approved", read_only=True)
    profilePicture = serializers.URLField(source="profile_picture", read_only=True)

    class Meta:
        model = Staff
        fields = ["id", "name", "email", "isAdmin", "isApproved", "profilePicture"]
        read_only_fields = fields


class StaffRefSerializer(serializers.ModelSerializer):
    """Compact ``{id, name, email}`` reference embedded in cases and evidence."""

    class Meta:
        model = Staff
        fields = ["id", "name", "email"]
        read_only_fields = fields


class ApproveStaffSerializer(serializers.Serializer):
    """``isApproved`` defaults to ``true`` when omitted."""

    isApproved = serializers.BooleanField(source="is_approved", required=False, default=True)


class StaffUpdateSerializer(serializers.Serializer):
    """Partial admin edit; only the keys sent are written."""

    name = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    isAdmin = serializers.BooleanField(source="is_admin", required=False)
