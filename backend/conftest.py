"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating test users.
  - ``auth_header`` fixture for authenticated requests (JWT).
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(first_name="Alice")
            # or with all fields:
            user = create_user(
                email="bob@example.com",
                password="Str0ng!Pass",
                role=UserRole.ADMINISTRATIVE,
                phone_number="+1 555-0100",
            )
    """
    from accounts.models import User, UserRole

    _counter = 0

    def _factory(
        *,
        email: str | None = None,
        password: str = "TestPass123!",
        role: str = UserRole.CIVILIAN,
        first_name: str | None = None,
        last_name: str = "Tester",
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if first_name is None:
            first_name = f"User{_counter}"
        if email is None:
            email = f"user{_counter}@test.local"

        return User.objects.create_user(
            email=email,
            password=password,
            role=role,
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper function that creates a user and returns an
    ``Authorization`` header dict with a valid session token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(role=UserRole.ADMIN)
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/core/dashboard/")
            assert resp.status_code != 401

    The returned dict looks like::

        {"Authorization": "Bearer eyJ..."}
    """
    from accounts.services import AuthenticationService

    def _make(**user_kwargs) -> dict[str, str]:
        user = create_user(**user_kwargs)
        token = AuthenticationService.generate_token(user)
        return {"Authorization": f"Bearer {token['access']}"}

    return _make
