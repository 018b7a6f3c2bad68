"""
End-to-end flow: a civilian signs up and reports a crime, an admin
assigns it to an officer, the officer investigates and closes it, and
every step shows up in the crime log and on the dashboards.

Uses only the public HTTP API (plus fixture users created directly).
"""

from __future__ import annotations

import base64

import pytest
from django.urls import reverse
from rest_framework import status

from accounts.models import UserRole
from crimes.models import CrimeStatus

_PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def _login(client, email, password, role):
    resp = client.post(
        reverse("accounts:login"),
        {"email": email, "password": password, "role": role},
        format="json",
    )
    assert resp.status_code == status.HTTP_200_OK, resp.data
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['access']}")
    return resp.data["user"]


@pytest.mark.django_db
def test_crime_lifecycle(api_client, create_user):
    create_user(email="admin@example.com", password="Adm1n!Pass", role=UserRole.ADMIN)
    officer = create_user(
        email="officer@police.local",
        password="0fficer!Pass",
        role=UserRole.ADMINISTRATIVE,
        first_name="Otto",
    )
    suspect = create_user(email="suspect@example.com", first_name="Sam")

    # ── 1. Civilian signs up and reports ────────────────────────────
    resp = api_client.post(
        reverse("accounts:signup"),
        {
            "email": "rita@example.com",
            "password": "R1ta!Pass99",
            "first_name": "Rita",
            "last_name": "Reporter",
        },
        format="json",
    )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    rita = _login(api_client, "rita@example.com", "R1ta!Pass99", UserRole.CIVILIAN)

    resp = api_client.post(
        reverse("crime-list"),
        {
            "title": "Laptop stolen from a cafe",
            "crime_type": "Theft",
            "date_occurred": "2024-07-14T15:00:00Z",
            "location": {"city": "Portland", "state": "Oregon", "country": "USA"},
            "accused_ids": [suspect.pk],
            "victim_ids": [rita["id"]],
            "evidence": [{"title": "Receipt", "image": f"data:image/png;base64,{_PNG_B64}"}],
        },
        format="json",
    )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data
    crime_id = resp.data["id"]
    assert resp.data["involvement"] == "Victim"

    # ── 2. Admin assigns an officer ─────────────────────────────────
    _login(api_client, "admin@example.com", "Adm1n!Pass", UserRole.ADMIN)
    update = {
        "title": "Laptop stolen from a cafe",
        "crime_type": "Theft",
        "description": "",
        "status": CrimeStatus.ACCEPTED,
        "date_occurred": "2024-07-14T15:00:00Z",
        "location": {"city": "Portland", "state": "Oregon", "country": "USA"},
        "accused_ids": [suspect.pk],
        "victim_ids": [rita["id"]],
        "administrative_id": officer.pk,
    }
    resp = api_client.put(reverse("crime-detail", kwargs={"pk": crime_id}), update, format="json")
    assert resp.status_code == status.HTTP_200_OK, resp.data
    assert resp.data["administrative"]["id"] == officer.pk

    # ── 3. Officer investigates, adds evidence and closes ───────────
    _login(api_client, "officer@police.local", "0fficer!Pass", UserRole.ADMINISTRATIVE)
    resp = api_client.post(
        reverse("evidence-list"),
        {
            "crime": crime_id,
            "title": "CCTV frame",
            "image": base64.b64encode(b"frame-bytes").decode(),
            "mime": "image/jpeg",
            "filename": "cctv.jpg",
        },
        format="json",
    )
    assert resp.status_code == status.HTTP_201_CREATED, resp.data

    update.pop("administrative_id")
    update["status"] = CrimeStatus.CLOSED
    update["log_message"] = "Laptop recovered and returned."
    resp = api_client.put(reverse("crime-detail", kwargs={"pk": crime_id}), update, format="json")
    assert resp.status_code == status.HTTP_200_OK, resp.data
    assert resp.data["status"] == CrimeStatus.CLOSED
    assert len(resp.data["evidence"]) == 2

    # ── 4. The reporter sees the whole history ──────────────────────
    _login(api_client, "rita@example.com", "R1ta!Pass99", UserRole.CIVILIAN)
    resp = api_client.get(reverse("crime-logs", kwargs={"pk": crime_id}))
    assert resp.status_code == status.HTTP_200_OK
    assert len(resp.data) == 3
    assert resp.data[0]["message"] == "Laptop recovered and returned."
    assert resp.data[-1]["message"] == "Crime reported by Rita Reporter."

    resp = api_client.get(reverse("core:dashboard-stats"))
    assert resp.data["total_crimes"] == 1
    assert resp.data["closed_crimes"] == 1
    assert resp.data["total_evidence"] == 2
