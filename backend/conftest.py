"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_staff`` factory fixture for creating test staff.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - ``media_root`` fixture pointing ``MEDIA_ROOT`` at a temp directory.
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_staff(db):
    """
    Factory fixture that creates an approved staff member with sensible
    defaults.

    Usage::

        def test_something(create_staff):
            staff = create_staff(name="Alice")
            admin = create_staff(is_admin=True)
            pending = create_staff(is_approved=False)
    """
    from accounts.models import Staff

    _counter = 0

    def _factory(
        *,
        name: str | None = None,
        email: str | None = None,
        password: str = "TestPass123!",
        is_admin: bool = False,
        is_approved: bool = True,
        **kwargs,
    ) -> Staff:
        nonlocal _counter
        _counter += 1
        if name is None:
            name = f"Staff Member {_counter}"
        if email is None:
            email = f"staff{_counter}@test.local"

        return Staff.objects.create_user(
            email=email,
            password=password,
            name=name,
            is_admin=is_admin,
            is_approved=is_approved,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_staff):
    """
    Returns a helper that creates a staff member and returns an
    ``Authorization`` header dict with a valid JWT access token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(is_admin=True)
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(**staff_kwargs) -> dict[str, str]:
        staff = create_staff(**staff_kwargs)
        token = AccessToken.for_user(staff)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def media_root(tmp_path, settings):
    """Store uploads under a per-test temporary directory."""
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path
