"""
Integration tests — dashboard statistics and system constants.

Endpoints under test:
    GET /api/core/dashboard/   (core:dashboard-stats)
    GET /api/core/constants/   (core:system-constants)
"""

from __future__ import annotations

from datetime import datetime, timezone

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import UserRole
from accounts.services import AuthenticationService
from crimes.models import Crime, CrimeLog, CrimeStatus
from evidence.models import Evidence

User = get_user_model()


def _make_user(email, first_name, role=UserRole.CIVILIAN):
    return User.objects.create_user(
        email=email,
        password="Str0ng!Pass99",
        first_name=first_name,
        last_name="Tester",
        role=role,
    )


class TestDashboardStats(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = _make_user("admin@example.com", "Ada", UserRole.ADMIN)
        cls.officer = _make_user("officer@police.local", "Otto", UserRole.ADMINISTRATIVE)
        cls.reporter = _make_user("reporter@example.com", "Rita")
        cls.stranger = _make_user("stranger@example.com", "Stan")

        occurred = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)

        def crime(title, crime_type, crime_status, administrative=None):
            return Crime.objects.create(
                title=title,
                crime_type=crime_type,
                date_occurred=occurred,
                status=crime_status,
                reported_by=cls.reporter,
                administrative=administrative,
            )

        cls.c1 = crime("Theft of a parked scooter", "Theft", CrimeStatus.INVESTIGATION, cls.officer)
        cls.c2 = crime("Theft of garden furniture", "Theft", CrimeStatus.CLOSED, cls.officer)
        cls.c3 = crime("Online auction fraud case", "Fraud", CrimeStatus.REPORTED)
        Evidence.objects.create(crime=cls.c1, title="Photo", image=b"x", submitted_by=cls.reporter)
        CrimeLog.objects.create(crime=cls.c1, author=cls.officer, message="Investigation started.")

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("core:dashboard-stats")

    def _login(self, user):
        token = AuthenticationService.generate_token(user)["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def test_admin_sees_system_wide_counts(self):
        self._login(self.admin)

        resp = self.client.get(self.url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["total_crimes"], 3)
        self.assertEqual(resp.data["ongoing_crimes"], 1)
        self.assertEqual(resp.data["closed_crimes"], 1)
        self.assertEqual(resp.data["unassigned_crimes"], 1)
        self.assertEqual(resp.data["total_evidence"], 1)
        self.assertEqual(resp.data["total_administratives"], 1)

    def test_crimes_by_status_lists_every_status(self):
        self._login(self.admin)

        by_status = {row["status"]: row["count"] for row in self.client.get(self.url).data["crimes_by_status"]}

        self.assertEqual(set(by_status), set(CrimeStatus.values))
        self.assertEqual(by_status[CrimeStatus.REPORTED], 1)
        self.assertEqual(by_status[CrimeStatus.PENDING], 0)

    def test_crimes_by_type_most_frequent_first(self):
        self._login(self.admin)

        rows = self.client.get(self.url).data["crimes_by_type"]

        self.assertEqual(
            [(row["crime_type"], row["count"]) for row in rows],
            [("Theft", 2), ("Fraud", 1)],
        )

    def test_administrative_counts_assigned_crimes_only(self):
        self._login(self.officer)

        resp = self.client.get(self.url)

        self.assertEqual(resp.data["total_crimes"], 2)
        self.assertEqual(resp.data["unassigned_crimes"], 0)
        self.assertEqual(len(resp.data["recent_activity"]), 1)
        self.assertEqual(resp.data["recent_activity"][0]["case_id"], f"CR-{self.c1.pk}")

    def test_civilian_without_crimes_sees_zeroes(self):
        self._login(self.stranger)

        resp = self.client.get(self.url)

        self.assertEqual(resp.data["total_crimes"], 0)
        self.assertEqual(resp.data["total_evidence"], 0)
        self.assertEqual(resp.data["recent_activity"], [])

    def test_requires_authentication(self):
        resp = self.client.get(self.url)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class TestSystemConstants(TestCase):

    def test_constants_are_public(self):
        resp = APIClient().get(reverse("core:system-constants"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item["value"] for item in resp.data["crime_statuses"]],
            list(CrimeStatus.values),
        )
        self.assertEqual(
            {item["value"] for item in resp.data["roles"]},
            {UserRole.CIVILIAN, UserRole.ADMIN, UserRole.ADMINISTRATIVE},
        )
        self.assertEqual(resp.data["ongoing_statuses"], ["investigation", "pending"])
        self.assertTrue(resp.data["designations"])
        self.assertTrue(resp.data["departments"])
