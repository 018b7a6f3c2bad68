"""
Integration tests — role-scoped crime listing, detail and log.

Endpoints under test:
    GET /api/crimes/              (crime-list)
    GET /api/crimes/{id}/         (crime-detail)
    GET /api/crimes/{id}/logs/    (crime-logs)

Visibility:
    Admin          → every crime
    Administrative → crimes assigned to them
    Civilian       → crimes they reported or are a victim / accused in
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
from crimes.models import Crime, CrimeLog, CrimeStatus, Location

User = get_user_model()


def _make_user(email, first_name, role=UserRole.CIVILIAN):
    return User.objects.create_user(
        email=email,
        password="Str0ng!Pass99",
        first_name=first_name,
        last_name="Tester",
        role=role,
    )


def _make_crime(title, reporter, *, crime_type="Theft", status=CrimeStatus.REPORTED,
                administrative=None, day=1, city="Springfield"):
    crime = Crime.objects.create(
        title=title,
        crime_type=crime_type,
        description=f"Details of {title.lower()}.",
        date_occurred=datetime(2024, 1, day, 12, 0, tzinfo=timezone.utc),
        status=status,
        reported_by=reporter,
        administrative=administrative,
    )
    Location.objects.create(crime=crime, city=city, state="Oregon", country="USA")
    return crime


class TestCrimeVisibility(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = _make_user("admin@example.com", "Ada", UserRole.ADMIN)
        cls.officer = _make_user("officer@police.local", "Otto", UserRole.ADMINISTRATIVE)
        cls.reporter = _make_user("reporter@example.com", "Rita")
        cls.victim = _make_user("victim@example.com", "Vic")
        cls.accused = _make_user("accused@example.com", "Abe")
        cls.stranger = _make_user("stranger@example.com", "Stan")

        cls.theft = _make_crime("Stolen car on Main Street", cls.reporter, day=1)
        cls.theft.victims.add(cls.victim)
        cls.fraud = _make_crime(
            "Credit card fraud at the mall", cls.reporter,
            crime_type="Fraud", status=CrimeStatus.INVESTIGATION,
            administrative=cls.officer, day=2, city="Shelbyville",
        )
        cls.fraud.accused.add(cls.accused)
        cls.assault = _make_crime(
            "Assault outside the stadium", cls.admin,
            crime_type="Assault", status=CrimeStatus.CLOSED, day=3,
        )
        CrimeLog.objects.create(crime=cls.fraud, author=cls.reporter, message="Crime reported by Rita Tester.")
        CrimeLog.objects.create(crime=cls.fraud, author=cls.officer, message="Suspect interviewed.")

    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("crime-list")

    def _login(self, user):
        token = AuthenticationService.generate_token(user)["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def _listed_ids(self, **params):
        resp = self.client.get(self.list_url, params)
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        return [row["id"] for row in resp.data]

    # ── Role scoping ─────────────────────────────────────────────────────────

    def test_admin_sees_all_newest_first(self):
        self._login(self.admin)
        self.assertEqual(self._listed_ids(), [self.assault.pk, self.fraud.pk, self.theft.pk])

    def test_administrative_sees_assigned_only(self):
        self._login(self.officer)
        self.assertEqual(self._listed_ids(), [self.fraud.pk])

    def test_civilian_sees_reported_victim_and_accused(self):
        cases = [
            (self.reporter, [self.fraud.pk, self.theft.pk]),
            (self.victim, [self.theft.pk]),
            (self.accused, [self.fraud.pk]),
            (self.stranger, []),
        ]
        for user, expected in cases:
            with self.subTest(user=user.email):
                self._login(user)
                self.assertEqual(self._listed_ids(), expected)

    def test_involvement_reported_per_caller(self):
        self._login(self.accused)

        row = self.client.get(self.list_url).data[0]

        self.assertEqual(row["involvement"], "Accused")
        self.assertEqual(row["administrative_name"], "Otto Tester")
        self.assertEqual(row["location"], "Shelbyville, Oregon, USA")

    # ── Filters & search ─────────────────────────────────────────────────────

    def test_filter_by_status(self):
        self._login(self.admin)
        self.assertEqual(self._listed_ids(status=CrimeStatus.CLOSED), [self.assault.pk])

    def test_filter_by_crime_type_is_case_insensitive(self):
        self._login(self.admin)
        self.assertEqual(self._listed_ids(crime_type="fraud"), [self.fraud.pk])

    def test_invalid_status_filter_rejected(self):
        self._login(self.admin)

        resp = self.client.get(self.list_url, {"status": "lost"})

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search_by_case_id(self):
        self._login(self.admin)
        self.assertIn(self.fraud.pk, self._listed_ids(search=f"CR-{self.fraud.pk}"))
        self.assertIn(self.fraud.pk, self._listed_ids(search=f"cr{self.fraud.pk}"))

    def test_search_by_text_and_location(self):
        self._login(self.admin)
        self.assertEqual(self._listed_ids(search="stadium"), [self.assault.pk])
        self.assertEqual(self._listed_ids(search="shelbyville"), [self.fraud.pk])

    def test_search_stays_within_scope(self):
        self._login(self.victim)
        self.assertEqual(self._listed_ids(search="fraud"), [])

    # ── Detail ───────────────────────────────────────────────────────────────

    def test_detail_includes_people_and_logs(self):
        self._login(self.officer)

        resp = self.client.get(reverse("crime-detail", kwargs={"pk": self.fraud.pk}))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["case_id"], f"CR-{self.fraud.pk}")
        self.assertEqual([u["id"] for u in resp.data["accused"]], [self.accused.pk])
        self.assertEqual(resp.data["involvement"], "Assigned")
        self.assertEqual(len(resp.data["logs"]), 2)

    def test_detail_of_invisible_crime_is_404(self):
        self._login(self.stranger)

        resp = self.client.get(reverse("crime-detail", kwargs={"pk": self.theft.pk}))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_detail_of_unknown_crime_is_404(self):
        self._login(self.admin)

        resp = self.client.get(reverse("crime-detail", kwargs={"pk": 999999}))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    # ── Log sub-resource ─────────────────────────────────────────────────────

    def test_logs_newest_first(self):
        self._login(self.admin)

        resp = self.client.get(reverse("crime-logs", kwargs={"pk": self.fraud.pk}))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [entry["message"] for entry in resp.data],
            ["Suspect interviewed.", "Crime reported by Rita Tester."],
        )
        self.assertEqual(resp.data[0]["author_name"], "Otto Tester")

    def test_logs_of_invisible_crime_is_404(self):
        self._login(self.victim)

        resp = self.client.get(reverse("crime-logs", kwargs={"pk": self.fraud.pk}))

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    # ── Authentication ───────────────────────────────────────────────────────

    def test_anonymous_rejected(self):
        resp = self.client.get(self.list_url)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_garbage_token_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        resp = self.client.get(self.list_url)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
