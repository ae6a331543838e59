"""
DRF permission classes for route-level gating.

Use them *after* ``IsAuthenticated`` so an anonymous caller is always
answered with ``Unauthenticated`` (401) rather than ``Forbidden`` (403)::

    permission_classes = [IsAuthenticated, IsAdmin]
"""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from core.domain.access import is_admin


class IsAdmin(BasePermission):
    """Allow access only to staff holding the admin flag."""

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:
        return is_admin(request.user)
