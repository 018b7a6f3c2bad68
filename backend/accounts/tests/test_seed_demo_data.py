"""
Tests for the ``seed_demo_data`` management command.
"""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from accounts.models import AdministrativeProfile, User, UserRole
from crimes.models import Crime, CrimeLog
from evidence.models import Evidence


def _seed(**options):
    out = StringIO()
    call_command(
        "seed_demo_data",
        admins=1,
        administratives=3,
        civilians=4,
        crimes=6,
        seed=1234,
        stdout=out,
        **options,
    )
    return out.getvalue()


@pytest.mark.django_db
class TestSeedDemoData:

    def test_creates_users_and_crimes(self):
        output = _seed()

        assert "6 crime(s) created" in output
        assert User.objects.filter(role=UserRole.ADMIN).count() == 1
        assert User.objects.filter(role=UserRole.ADMINISTRATIVE).count() == 3
        assert User.objects.filter(role=UserRole.CIVILIAN).count() == 4
        assert list(
            AdministrativeProfile.objects.order_by("badge_number").values_list("badge_number", flat=True)
        ) == [1, 2, 3]
        assert Crime.objects.count() == 6
        assert Evidence.objects.count() == 6
        for crime in Crime.objects.all():
            assert crime.location.city
            assert crime.accused.count() == 1
            assert crime.victims.count() == 1
            assert CrimeLog.objects.filter(crime=crime).exists()

    def test_rerun_replaces_previous_demo_data(self, create_user):
        keeper = create_user(email="real.person@example.com")
        _seed()
        _seed()

        assert Crime.objects.count() == 6
        assert User.objects.filter(role=UserRole.ADMINISTRATIVE).count() == 3
        assert User.objects.filter(pk=keeper.pk).exists()

    def test_demo_accounts_can_sign_in(self):
        _seed(password="Demo!Pass1")
        user = User.objects.filter(role=UserRole.CIVILIAN).first()

        assert user.check_password("Demo!Pass1")

    def test_rerun_keeps_crimes_of_real_accounts(self, create_user):
        _seed()
        keeper = create_user(email="real.person@example.com")
        demo_officer = User.objects.filter(role=UserRole.ADMINISTRATIVE).first()
        crime = Crime.objects.create(
            title="Real report kept across seeding",
            crime_type="Fraud",
            date_occurred=timezone.now(),
            reported_by=keeper,
            administrative=demo_officer,
        )
        CrimeLog.objects.create(crime=crime, author=keeper, message="Crime reported by User Tester.")

        _seed()

        crime.refresh_from_db()
        assert crime.administrative is None
        assert CrimeLog.objects.filter(crime=crime).count() == 1
        assert Crime.objects.exclude(pk=crime.pk).count() == 6
