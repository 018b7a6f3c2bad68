"""
Unit tests for the shared domain helpers in ``core.domain``.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from django.core.exceptions import RequestDataTooBig, SuspiciousOperation
from django.db import transaction
from rest_framework import status

from accounts.models import UserRole
from core.domain.access import apply_role_scope, require_role
from core.domain.exception_handler import domain_exception_handler
from core.domain.exceptions import (
    Conflict,
    InvalidRole,
    NotFound,
    PermissionDenied,
    ReferentialError,
)
from core.domain.relations import compute_relation_diff, reconcile_many_to_many
from core.domain.transactions import lock_for_update
from crimes.models import Crime


# ════════════════════════════════════════════════════════════════════
#  Relation reconciliation
# ════════════════════════════════════════════════════════════════════

class TestComputeRelationDiff:

    def test_added_and_removed(self):
        diff = compute_relation_diff([1, 2, 3], [2, 3, 4])
        assert diff.added == {4}
        assert diff.removed == {1}
        assert diff.changed

    def test_identical_sets_unchanged(self):
        diff = compute_relation_diff([1, 2], [2, 1, 1])
        assert not diff.changed


@pytest.mark.django_db
class TestReconcileManyToMany:

    def test_relation_equals_target_set(self, create_user):
        reporter = create_user()
        a, b, c = create_user(), create_user(), create_user()
        crime = Crime.objects.create(
            title="Reconciliation target crime",
            crime_type="Fraud",
            date_occurred=datetime(2024, 1, 1, tzinfo=timezone.utc),
            reported_by=reporter,
        )
        crime.accused.add(a, b)

        diff = reconcile_many_to_many(crime.accused, [b.pk, c.pk])

        assert set(crime.accused.values_list("pk", flat=True)) == {b.pk, c.pk}
        assert diff.added == {c.pk}
        assert diff.removed == {a.pk}


# ════════════════════════════════════════════════════════════════════
#  Access helpers
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestAccessHelpers:

    def test_require_role_passes_and_fails(self, create_user):
        admin = create_user(role=UserRole.ADMIN)
        civilian = create_user()

        require_role(admin, UserRole.ADMIN)
        with pytest.raises(PermissionDenied):
            require_role(civilian, UserRole.ADMIN, UserRole.ADMINISTRATIVE)

    def test_role_without_rule_sees_nothing(self, create_user):
        from accounts.models import User

        civilian = create_user()
        rules = {UserRole.ADMIN: lambda qs, u: qs}

        assert list(apply_role_scope(User.objects.all(), civilian, scope_rules=rules)) == []


# ════════════════════════════════════════════════════════════════════
#  Transactions
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestLockForUpdate:

    def test_missing_row_raises_not_found(self):
        with transaction.atomic():
            with pytest.raises(NotFound):
                lock_for_update(Crime, 999999, label="Crime")


# ════════════════════════════════════════════════════════════════════
#  Exception handler
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptionHandler:

    @pytest.mark.parametrize("exc,expected", [
        (ReferentialError(field="accused_ids", missing_ids=[3]), status.HTTP_400_BAD_REQUEST),
        (InvalidRole(), status.HTTP_401_UNAUTHORIZED),
        (PermissionDenied(), status.HTTP_403_FORBIDDEN),
        (NotFound(), status.HTTP_404_NOT_FOUND),
        (Conflict(), status.HTTP_409_CONFLICT),
    ])
    def test_maps_domain_errors(self, exc, expected):
        resp = domain_exception_handler(exc, {})
        assert resp.status_code == expected
        assert resp.data["code"] == exc.code

    def test_unexpected_error_is_hidden(self):
        resp = domain_exception_handler(RuntimeError("database password is hunter2"), {})
        assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert resp.data == {"detail": "Internal server error."}

    def test_oversized_body_is_413(self):
        resp = domain_exception_handler(RequestDataTooBig("Request body exceeded the limit."), {})
        assert resp.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert resp.data["code"] == "PAYLOAD_TOO_LARGE"

    def test_suspicious_request_is_400(self):
        resp = domain_exception_handler(SuspiciousOperation("Invalid HTTP_HOST header."), {})
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data == {"detail": "Malformed request.", "code": "BAD_REQUEST"}

    def test_referential_error_message_names_ids(self):
        exc = ReferentialError(field="victim_ids", missing_ids=[9, 4])
        assert str(exc) == "One or more referenced records do not exist (victim_ids: 4, 9)."
