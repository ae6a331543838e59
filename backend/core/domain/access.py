"""
core.domain.access — Authorization helpers shared by the service layers.

Route-level gating (``authenticated`` vs ``admin``) is done by the DRF
permission classes in ``core.permissions``.  The helpers here are the
service-layer counterpart: they re-check the *current* staff row, so a
role change made by an admin takes effect on the very next request.

Usage in an app's service layer::

    from core.domain.access import require_admin, require_owner

    require_admin(requesting_user, "Only admins can close cases.")
    require_owner(requesting_user, evidence.uploaded_by_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from accounts.models import Staff


def is_admin(user: Staff) -> bool:
    """Return ``True`` if the authenticated staff member holds the admin flag."""
    return bool(getattr(user, "is_authenticated", False) and getattr(user, "is_admin", False))


def require_admin(user: Staff, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` unless the user is an admin.

    Raises:
        core.domain.exceptions.PermissionDenied
    """
    from core.domain.exceptions import PermissionDenied

    if not is_admin(user):
        raise PermissionDenied(message or "Admin access required.")


def require_owner(user: Staff, owner_id: Any, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` (code ``Unauthorized``) unless
    ``user`` is the owner referenced by ``owner_id``.

    Admin status does **not** bypass this check; admin edits go through
    their own service entry points.
    """
    from core.domain.exceptions import PermissionDenied

    if owner_id is None or user.pk != owner_id:
        raise PermissionDenied(
            message or "You are not authorized to modify this record.",
            code="Unauthorized",
        )
