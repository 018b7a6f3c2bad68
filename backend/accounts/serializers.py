"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here — all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

import re
from typing import Any

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import (
    AdministrativeProfile,
    AdminProfile,
    Department,
    Designation,
    UserRole,
)

User = get_user_model()

# ── Phone number validation regex ───────────────────────────────────
_PHONE_REGEX = re.compile(r"^\+?[\d\s\-()]{7,20}$")


def _validate_phone(value: str) -> str:
    if value and not _PHONE_REGEX.match(value):
        raise serializers.ValidationError("Enter a valid phone number.")
    return value


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class SignupRequestSerializer(serializers.ModelSerializer):
    """
    Validates civilian sign-up data.

    The ``password`` field is write-only and is hashed by the service
    layer before persisting.
    """

    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Minimum 8 characters.",
    )

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "first_name",
            "last_name",
            "phone_number",
            "dob",
            "location",
        ]
        extra_kwargs = {
            "first_name": {"required": True, "allow_blank": False},
            # Uniqueness is reported as 409 by the service layer.
            "email": {"validators": []},
        }

    def validate_phone_number(self, value: str) -> str:
        return _validate_phone(value)


class LoginRequestSerializer(serializers.Serializer):
    """
    Sign-in credentials: email, password and the claimed role.

    Fields are accepted blank here so that the service layer can report
    the ``MISSING_FIELDS`` error kind consistently.
    """

    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        write_only=True,
        style={"input_type": "password"},
    )
    role = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        help_text=(
            "One of: " + ", ".join(UserRole.values)
            + ".  Matched case-insensitively; labels such as 'Admin' are accepted."
        ),
    )


# ═══════════════════════════════════════════════════════════════════
#  Profile Serializers
# ═══════════════════════════════════════════════════════════════════


class AdminProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminProfile
        fields = ["id", "created_at"]
        read_only_fields = fields


class AdministrativeProfileSerializer(serializers.ModelSerializer):
    designation_display = serializers.CharField(source="get_designation_display", read_only=True)
    department_display = serializers.CharField(source="get_department_display", read_only=True)

    class Meta:
        model = AdministrativeProfile
        fields = [
            "badge_number",
            "designation",
            "designation_display",
            "department",
            "department_display",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user reference nested inside crime and evidence payloads."""

    name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "first_name", "last_name", "email", "phone_number"]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full profile of a user, including the role-specific profile record.
    """

    name = serializers.CharField(read_only=True)
    role_display = serializers.CharField(source="get_role_display", read_only=True)
    admin_details = serializers.SerializerMethodField()
    administrative_details = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "first_name",
            "last_name",
            "phone_number",
            "dob",
            "location",
            "role",
            "role_display",
            "admin_details",
            "administrative_details",
            "date_joined",
        ]
        read_only_fields = fields

    def get_admin_details(self, obj) -> dict | None:
        if not obj.is_admin:
            return None
        profile = getattr(obj, "admin_profile", None)
        return AdminProfileSerializer(profile).data if profile else None

    def get_administrative_details(self, obj) -> dict | None:
        if not obj.is_administrative:
            return None
        profile = getattr(obj, "administrative_profile", None)
        return AdministrativeProfileSerializer(profile).data if profile else None


class MeUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own profile (PATCH /me/)."""

    class Meta:
        model = User
        fields = ["first_name", "last_name", "phone_number", "dob", "location"]

    def validate_phone_number(self, value: str) -> str:
        return _validate_phone(value)


class TokenResponseSerializer(serializers.Serializer):
    """Shape of a successful sign-in response (schema only)."""

    access = serializers.CharField(read_only=True)
    token_type = serializers.CharField(read_only=True)
    expires_in = serializers.IntegerField(read_only=True)
    user = UserDetailSerializer(read_only=True)


# ═══════════════════════════════════════════════════════════════════
#  Directory / Administrative Serializers
# ═══════════════════════════════════════════════════════════════════


class UserSearchSerializer(serializers.Serializer):
    """Query parameters for ``GET /users/``."""

    query = serializers.CharField(required=False, allow_blank=True, max_length=255)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)


class AdministrativeListSerializer(serializers.ModelSerializer):
    """
    Officer row for the Admin dashboard table.

    ``total_cases`` / ``ongoing_cases`` come from queryset annotations.
    """

    name = serializers.CharField(read_only=True)
    badge_number = serializers.IntegerField(source="administrative_profile.badge_number", read_only=True)
    designation = serializers.CharField(source="administrative_profile.designation", read_only=True)
    department = serializers.CharField(source="administrative_profile.department", read_only=True)
    total_cases = serializers.IntegerField(read_only=True, default=0)
    ongoing_cases = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "first_name",
            "last_name",
            "email",
            "phone_number",
            "location",
            "badge_number",
            "designation",
            "department",
            "total_cases",
            "ongoing_cases",
        ]
        read_only_fields = fields


class AdministrativeCreateSerializer(serializers.Serializer):
    """Admin creates a new administrative (officer) account."""

    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
    )
    designation = serializers.ChoiceField(choices=Designation.choices)
    department = serializers.ChoiceField(choices=Department.choices)
    phone_number = serializers.CharField(required=False, allow_blank=True, max_length=20, default="")
    location = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")

    def validate_phone_number(self, value: str) -> str:
        return _validate_phone(value)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs["first_name"] = attrs["first_name"].strip()
        attrs["last_name"] = attrs["last_name"].strip()
        if not attrs["first_name"] or not attrs["last_name"]:
            raise serializers.ValidationError("First and last name are required.")
        return attrs
