"""
Integration tests — sign-in with email, password and claimed role.

Endpoint under test:  POST /api/accounts/auth/login/
                      (named URL: accounts:login)
Request payload:      {"email": "...", "password": "...", "role": "..."}
Success response:     HTTP 200, {"access", "token_type", "expires_in", "user"}
Failure responses:    HTTP 400 MISSING_FIELDS,
                      HTTP 401 USER_NOT_FOUND / INVALID_PASSWORD / INVALID_ROLE
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import UserRole

User = get_user_model()

# ── Constants ────────────────────────────────────────────────────────────────
_PASSWORD = "Str0ng!Pass99"
_EMAIL = "officer.smith@example.com"


class TestAuthLogin(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            email=_EMAIL,
            password=_PASSWORD,
            first_name="John",
            last_name="Smith",
            role=UserRole.ADMINISTRATIVE,
        )

    def setUp(self):
        self.client = APIClient()
        self.login_url = reverse("accounts:login")

    # ── Helper ───────────────────────────────────────────────────────────────

    def _post_login(self, **overrides):
        payload = {"email": _EMAIL, "password": _PASSWORD, "role": UserRole.ADMINISTRATIVE}
        payload.update(overrides)
        return self.client.post(self.login_url, payload, format="json")

    # ── Success ──────────────────────────────────────────────────────────────

    def test_login_returns_token_and_user(self):
        resp = self._post_login()

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["token_type"], "Bearer")
        self.assertEqual(resp.data["expires_in"], 3600)
        self.assertNotIn("refresh", resp.data)
        self.assertEqual(resp.data["user"]["id"], self.user.pk)
        self.assertEqual(resp.data["user"]["role"], UserRole.ADMINISTRATIVE)

    def test_token_carries_identity_claims(self):
        resp = self._post_login()
        token = AccessToken(resp.data["access"])

        self.assertEqual(int(token["user_id"]), self.user.pk)
        self.assertEqual(token["name"], "John Smith")
        self.assertEqual(token["email"], _EMAIL)
        self.assertEqual(token["role"], UserRole.ADMINISTRATIVE)
        self.assertEqual(token["exp"] - token["iat"], 3600)

    def test_email_lookup_is_case_insensitive(self):
        resp = self._post_login(email=_EMAIL.upper())
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)

    def test_role_accepts_label_in_any_case(self):
        for role in ("Administrative", "ADMINISTRATIVE", " administrative "):
            with self.subTest(role=role):
                resp = self._post_login(role=role)
                self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
                self.assertEqual(resp.data["user"]["role"], UserRole.ADMINISTRATIVE)

    def test_other_role_label_still_rejected(self):
        resp = self._post_login(role="Admin")

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["code"], "INVALID_ROLE")

    def test_token_authenticates_follow_up_request(self):
        access = self._post_login().data["access"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        resp = self.client.get(reverse("accounts:me"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["email"], _EMAIL)

    # ── Failures, each kind reported distinctly ──────────────────────────────

    def test_missing_fields(self):
        for field in ("email", "password", "role"):
            with self.subTest(field=field):
                resp = self._post_login(**{field: ""})
                self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(resp.data["code"], "MISSING_FIELDS")

    def test_unknown_email(self):
        resp = self._post_login(email="nobody@example.com")

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["code"], "USER_NOT_FOUND")

    def test_wrong_password(self):
        resp = self._post_login(password="WrongPass!1")

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["code"], "INVALID_PASSWORD")

    def test_wrong_role(self):
        resp = self._post_login(role=UserRole.ADMIN)

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["code"], "INVALID_ROLE")

    def test_inactive_user_cannot_sign_in(self):
        User.objects.filter(pk=self.user.pk).update(is_active=False)

        resp = self._post_login()

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["code"], "INVALID_PASSWORD")
