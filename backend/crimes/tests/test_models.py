"""
Unit tests for crimes models: case ids and the append-only crime log.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.domain.exceptions import Conflict
from crimes.models import Crime, CrimeLog, CrimeStatus


@pytest.fixture()
def crime(create_user):
    reporter = create_user(email="reporter@example.com", first_name="Rita")
    return Crime.objects.create(
        title="Shoplifting at the grocery store",
        crime_type="Theft",
        date_occurred=datetime(2024, 2, 1, 9, 30, tzinfo=timezone.utc),
        reported_by=reporter,
    )


@pytest.mark.django_db
class TestCrime:

    def test_defaults(self, crime):
        assert crime.status == CrimeStatus.REPORTED
        assert crime.administrative is None
        assert crime.description == ""

    def test_case_id(self, crime):
        assert crime.case_id == f"CR-{crime.pk}"
        assert str(crime).startswith(crime.case_id)


@pytest.mark.django_db
class TestCrimeLogAppendOnly:

    def test_new_entry_can_be_saved(self, crime):
        entry = CrimeLog.objects.create(crime=crime, author=crime.reported_by, message="Opened.")
        assert CrimeLog.objects.filter(pk=entry.pk).exists()

    def test_existing_entry_cannot_be_changed(self, crime):
        entry = CrimeLog.objects.create(crime=crime, author=crime.reported_by, message="Opened.")
        entry.message = "Rewritten history."

        with pytest.raises(Conflict):
            entry.save()

        entry.refresh_from_db()
        assert entry.message == "Opened."

    def test_entry_cannot_be_deleted(self, crime):
        entry = CrimeLog.objects.create(crime=crime, author=crime.reported_by, message="Opened.")

        with pytest.raises(Conflict):
            entry.delete()

        assert CrimeLog.objects.filter(pk=entry.pk).exists()

    def test_author_removal_keeps_entry(self, crime, create_user):
        officer = create_user(email="gone@example.com", first_name="Gone")
        entry = CrimeLog.objects.create(crime=crime, author=officer, message="Note.")

        officer.delete()

        entry.refresh_from_db()
        assert entry.author is None
