"""
Bearer-token authentication for staff.

The token carries the staff id only.  Every request re-reads the staff row
so that deletion, unapproval or a change of the admin flag takes effect on
the next request instead of waiting for the token to expire.
"""

from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class StaffJWTAuthentication(JWTAuthentication):
    """
    ``JWTAuthentication`` that also rejects tokens of staff whose approval
    was withdrawn after the token was issued.

    Missing staff rows are already rejected by the parent class
    (``user_not_found``).
    """

    def get_user(self, validated_token):
        staff = super().get_user(validated_token)
        if not staff.is_approved:
            raise AuthenticationFailed(
                "Account is no longer approved.",
                code="user_not_approved",
            )
        return staff
