"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service method, and return the result
wrapped in a DRF ``Response``.

Architecture
------------
- ``StaffRegistrationService``  — self-registration and the one-time
                                  bootstrap admin.
- ``AuthenticationService``     — email/password login + JWT issuance.
- ``StaffManagementService``    — admin-side listing, approval, edits,
                                  deletion.
- ``CurrentStaffService``       — "profile" endpoint helpers.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from rest_framework_simplejwt.tokens import RefreshToken

from core.domain.access import require_admin
from core.domain.exceptions import (
    AuthenticationFailed,
    DomainError,
    NotFound,
    PermissionDenied,
)

Staff = get_user_model()
logger = logging.getLogger(__name__)


def _raise_duplicate_email(email: str) -> None:
    raise DomainError(f"Email {email} is already registered.", code="DuplicateEmail")


def _email_taken(email: str, *, exclude_pk: int | None = None) -> bool:
    qs = Staff.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class StaffRegistrationService:
    """
    Creates new staff accounts.

    Ordinary registration produces an *unapproved* account that cannot
    log in until an admin approves it.  The bootstrap path creates the
    first admin and is closed for good as soon as any admin exists.
    """

    @staticmethod
    def register_staff(validated_data: dict[str, Any]) -> Staff:
        """
        Create a new, unapproved, non-admin staff member.

        Parameters
        ----------
        validated_data : dict
            ``name``, ``email`` and ``password`` from
            ``RegisterRequestSerializer``.

        Returns
        -------
        Staff
            The newly created staff member.

        Raises
        ------
        core.domain.exceptions.DomainError
            ``DuplicateEmail`` if the email is already registered
            (compared case-insensitively).
        """
        email = validated_data["email"]
        if _email_taken(email):
            _raise_duplicate_email(email)

        try:
            with transaction.atomic():
                staff = Staff.objects.create_user(
                    email=email,
                    password=validated_data["password"],
                    name=validated_data["name"],
                    is_admin=False,
                    is_approved=False,
                )
        except IntegrityError:
            _raise_duplicate_email(email)

        logger.info("Staff #%d registered (%s), awaiting approval", staff.pk, staff.email)
        return staff

    @staticmethod
    def register_bootstrap_admin(validated_data: dict[str, Any]) -> Staff:
        """
        Create the first admin, gated by ``settings.ADMIN_SECRET``.

        Checks run in this order:

        1. Any admin already exists → ``AdminAlreadyExists`` (403).
        2. The secret is not configured or does not match →
           ``InvalidSecret`` (401).
        3. The email is taken → ``DuplicateEmail`` (400).

        The created admin is approved immediately.
        """
        if Staff.objects.filter(is_admin=True).exists():
            raise PermissionDenied(
                "An admin already exists. Use admin credentials to manage staff.",
                code="AdminAlreadyExists",
            )

        expected = settings.ADMIN_SECRET
        supplied = validated_data.get("secret") or ""
        if not expected or not secrets.compare_digest(supplied.encode(), expected.encode()):
            logger.warning("Bootstrap admin attempt with an invalid secret")
            raise AuthenticationFailed("Invalid admin secret key.", code="InvalidSecret")

        email = validated_data["email"]
        if _email_taken(email):
            _raise_duplicate_email(email)

        with transaction.atomic():
            admin = Staff.objects.create_user(
                email=email,
                password=validated_data["password"],
                name=validated_data["name"],
                is_admin=True,
                is_approved=True,
            )

        logger.info("Bootstrap admin #%d created (%s)", admin.pk, admin.email)
        return admin


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Email + password login and JWT token generation.
    """

    @staticmethod
    def authenticate(email: str, password: str) -> Staff:
        """
        Validate credentials and return the staff member.

        The approval flag is checked *before* the password, so an
        unapproved account always answers ``PendingApproval`` whatever
        password was supplied.

        Raises
        ------
        core.domain.exceptions.AuthenticationFailed
            ``InvalidCredentials`` for an unknown email or a wrong
            password.
        core.domain.exceptions.PermissionDenied
            ``PendingApproval`` for an unapproved account.
        """
        try:
            staff = Staff.objects.get(email__iexact=email)
        except Staff.DoesNotExist:
            # Run the default password hasher to mitigate timing attacks
            Staff().set_password(password)
            raise AuthenticationFailed()

        if not staff.is_approved:
            raise PermissionDenied("Account awaiting admin approval.", code="PendingApproval")

        if not staff.is_active or not staff.check_password(password):
            raise AuthenticationFailed()

        logger.info("Staff #%d logged in", staff.pk)
        return staff

    @staticmethod
    def generate_tokens(staff: Staff) -> dict[str, Any]:
        """
        Issue a JWT access/refresh pair.

        The tokens carry the staff id only; the admin flag is read from
        the database on every request.

        Returns
        -------
        dict
            ``{"token", "refresh", "email", "is_admin"}``.
        """
        refresh = RefreshToken.for_user(staff)
        return {
            "token": str(refresh.access_token),
            "refresh": str(refresh),
            "email": staff.email,
            "is_admin": staff.is_admin,
        }

    @classmethod
    def login(cls, email: str, password: str) -> dict[str, Any]:
        """``authenticate`` followed by ``generate_tokens``."""
        return cls.generate_tokens(cls.authenticate(email, password))


# ═══════════════════════════════════════════════════════════════════
#  Staff Management Service
# ═══════════════════════════════════════════════════════════════════


class StaffManagementService:
    """
    Admin operations on staff accounts.

    Routes are already admin-gated by ``IsAdmin``; every method re-checks
    ``performed_by`` so the rules hold for non-HTTP callers too.
    """

    @staticmethod
    def list_staff(performed_by: Staff, *, pending_only: bool = False) -> QuerySet[Staff]:
        """Return all staff (or only the unapproved ones), ordered by name."""
        require_admin(performed_by)
        qs = Staff.objects.all()
        if pending_only:
            qs = qs.filter(is_approved=False)
        return qs.order_by("name", "id")

    @staticmethod
    def get_staff(staff_id: int) -> Staff:
        try:
            return Staff.objects.get(pk=staff_id)
        except Staff.DoesNotExist:
            raise NotFound(f"Staff with id {staff_id} not found.")

    @classmethod
    def set_approval(cls, *, staff_id: int, is_approved: bool, performed_by: Staff) -> Staff:
        """
        Approve or unapprove a staff member.

        Unapproving takes effect on the target's next request: the JWT
        authentication class rejects tokens of unapproved staff.

        Raises
        ------
        NotFound
            Unknown ``staff_id``.
        PermissionDenied
            The target is an admin; admin approval cannot be changed.
        """
        require_admin(performed_by)
        staff = cls.get_staff(staff_id)
        if staff.is_admin:
            raise PermissionDenied("Cannot modify admin approval status.")

        staff.is_approved = is_approved
        staff.save(update_fields=["is_approved"])

        logger.info(
            "Staff #%d %s by admin #%d",
            staff.pk,
            "approved" if is_approved else "unapproved",
            performed_by.pk,
        )
        return staff

    @classmethod
    def update_staff(cls, *, staff_id: int, data: dict[str, Any], performed_by: Staff) -> Staff:
        """
        Edit ``name``, ``email`` and/or ``is_admin``.

        Only the keys present in ``data`` are written.  Granting
        ``is_admin`` also approves the account, since admins cannot be
        unapproved afterwards.

        Raises
        ------
        NotFound
            Unknown ``staff_id``.
        DomainError
            ``DuplicateEmail`` when the new email belongs to someone else.
        """
        require_admin(performed_by)
        staff = cls.get_staff(staff_id)

        update_fields = []
        if "name" in data:
            staff.name = data["name"]
            update_fields.append("name")
        if "email" in data:
            email = Staff.objects.normalize_email(data["email"])
            if _email_taken(email, exclude_pk=staff.pk):
                _raise_duplicate_email(email)
            staff.email = email
            update_fields.append("email")
        if "is_admin" in data:
            staff.is_admin = data["is_admin"]
            update_fields.append("is_admin")
            if staff.is_admin and not staff.is_approved:
                staff.is_approved = True
                update_fields.append("is_approved")

        if update_fields:
            try:
                staff.save(update_fields=update_fields)
            except IntegrityError:
                _raise_duplicate_email(staff.email)
            logger.info(
                "Staff #%d updated by admin #%d (%s)",
                staff.pk, performed_by.pk, ", ".join(update_fields),
            )
        return staff

    @classmethod
    def delete_staff(cls, *, staff_id: int, performed_by: Staff) -> None:
        """
        Delete a staff account.

        Cases, evidence and remarks referencing the deleted staff keep
        existing with their staff reference cleared.

        Raises
        ------
        NotFound
            Unknown ``staff_id``.
        DomainError
            An admin attempting to delete their own account.
        """
        require_admin(performed_by)
        staff = cls.get_staff(staff_id)
        if staff.pk == performed_by.pk:
            raise DomainError("You cannot delete your own account.")

        staff.delete()
        logger.info("Staff #%s deleted by admin #%d", staff_id, performed_by.pk)


# ═══════════════════════════════════════════════════════════════════
#  Current Staff ("profile") Service
# ═══════════════════════════════════════════════════════════════════


class CurrentStaffService:

    @staticmethod
    def get_profile(staff: Staff) -> Staff:
        """Return a fresh copy of the authenticated staff member's row."""
        try:
            return Staff.objects.get(pk=staff.pk)
        except Staff.DoesNotExist:
            raise NotFound("Staff not found.")
