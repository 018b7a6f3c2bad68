"""
Smoke tests — verify that Django boots, URL routing resolves, the
OpenAPI schema renders and the shared domain modules are importable.

These tests require a DB only where marked; they do NOT require real
data — they just prove the plumbing works.
"""

from __future__ import annotations

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure all top-level app URL names reverse to the expected paths."""

    EXPECTED_URLS = [
        # (url_name, expected_path)
        ("accounts:signup",             "/api/accounts/auth/signup/"),
        ("accounts:login",              "/api/accounts/auth/login/"),
        ("accounts:me",                 "/api/accounts/me/"),
        ("accounts:user-search",        "/api/accounts/users/"),
        ("accounts:administrative-list", "/api/accounts/administratives/"),
        ("crime-list",                  "/api/crimes/"),
        ("evidence-list",               "/api/evidence/"),
        ("evidence-bulk-delete",        "/api/evidence/bulk-delete/"),
        ("core:dashboard-stats",        "/api/core/dashboard/"),
        ("core:system-constants",       "/api/core/constants/"),
    ]

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, expected_path: str):
        assert reverse(url_name) == expected_path

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_path_resolves_to_view(self, url_name: str, expected_path: str):
        match = resolve(expected_path)
        assert match.func is not None

    def test_crime_detail_routes(self):
        assert reverse("crime-detail", kwargs={"pk": 7}) == "/api/crimes/7/"
        assert reverse("crime-logs", kwargs={"pk": 7}) == "/api/crimes/7/logs/"


# ════════════════════════════════════════════════════════════════════
#  OpenAPI Schema
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
def test_schema_renders(api_client):
    resp = api_client.get("/api/schema/")
    assert resp.status_code == 200


# ════════════════════════════════════════════════════════════════════
#  Core Domain Module Import Tests
# ════════════════════════════════════════════════════════════════════

class TestCoreDomainImports:
    """Verify that shared domain utility modules are importable."""

    def test_import_exceptions(self):
        from core.domain.exceptions import (
            AuthenticationError,
            Conflict,
            DomainError,
            InvalidPassword,
            InvalidRole,
            NotFound,
            PermissionDenied,
            ReferentialError,
            UserNotFound,
        )
        # Ensure they form an inheritance chain
        for exc in (UserNotFound, InvalidPassword, InvalidRole):
            assert issubclass(exc, AuthenticationError)
        for exc in (AuthenticationError, Conflict, NotFound, PermissionDenied, ReferentialError):
            assert issubclass(exc, DomainError)

    def test_import_transactions(self):
        from core.domain.transactions import lock_for_update
        assert callable(lock_for_update)

    def test_import_access(self):
        from core.domain.access import (
            apply_role_scope,
            get_user_role_name,
            require_role,
        )
        assert callable(apply_role_scope)
        assert callable(get_user_role_name)
        assert callable(require_role)

    def test_import_relations(self):
        from core.domain.relations import reconcile_many_to_many
        assert callable(reconcile_many_to_many)
