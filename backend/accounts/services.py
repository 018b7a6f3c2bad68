"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service function / method, and
return the result wrapped in a DRF ``Response``.

Architecture
------------
- ``UserRegistrationService``   — civilian sign-up.
- ``AuthenticationService``     — email/password/role credential check + token.
- ``CurrentUserService``        — "Me" endpoint helpers.
- ``UserDirectoryService``      — user search for accused/victim pickers.
- ``AdministrativeService``     — Admin-only officer listing and creation.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Max, Q, QuerySet
from rest_framework_simplejwt.tokens import AccessToken

from core.constants import FIRST_BADGE_NUMBER, ONGOING_CRIME_STATUSES, SESSION_LIFETIME
from core.domain.access import require_role
from core.domain.exceptions import (
    Conflict,
    DomainError,
    InvalidPassword,
    InvalidRole,
    UserNotFound,
)

from .models import AdministrativeProfile, UserRole

User = get_user_model()
logger = logging.getLogger(__name__)


def _resolve_role(claimed: str) -> str | None:
    """Map a claimed role, given as value or label in any case, to a ``UserRole`` value."""
    claimed = claimed.strip().lower()
    for value, label in UserRole.choices:
        if claimed in (value, label.lower()):
            return value
    return None


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """Encapsulates the public sign-up flow.  Every sign-up is a civilian."""

    @staticmethod
    def register_civilian(validated_data: dict[str, Any]) -> User:
        """
        Create a new civilian user.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``SignupRequestSerializer``: ``email``,
            ``password``, ``first_name`` and optionally ``last_name``,
            ``phone_number``, ``dob``, ``location``.

        Raises
        ------
        core.domain.exceptions.Conflict
            If the email is already registered.
        """
        data = dict(validated_data)
        password = data.pop("password")
        email = User.objects.normalize_email(data.pop("email"))

        if User.objects.filter(email__iexact=email).exists():
            raise Conflict("A user with this email already exists.")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    role=UserRole.CIVILIAN,
                    **data,
                )
        except IntegrityError:
            raise Conflict("A user with this email already exists.")

        logger.info("Civilian user #%d registered (%s)", user.pk, user.email)
        return user


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Credential check for sign-in.

    The check runs in a fixed order so every kind of mismatch is
    reported with its own error: unknown email → ``UserNotFound``,
    wrong password → ``InvalidPassword``, wrong role → ``InvalidRole``.
    """

    @staticmethod
    def authenticate(email: str, password: str, role: str) -> User:
        """
        Validate ``email`` / ``password`` / claimed ``role``.

        Returns
        -------
        User
            The authenticated, active user.

        Raises
        ------
        DomainError
            ``MISSING_FIELDS`` if any of the three values is empty.
        UserNotFound, InvalidPassword, InvalidRole
            On the corresponding mismatch.
        """
        if not email or not password or not role:
            raise DomainError("Email, password and role are required.", code="MISSING_FIELDS")

        try:
            user = User.objects.get(email__iexact=email.strip())
        except User.DoesNotExist:
            # Run the default password hasher to mitigate timing attacks
            User().set_password(password)
            raise UserNotFound()

        if not user.check_password(password) or not user.is_active:
            raise InvalidPassword()

        if user.role != _resolve_role(role):
            raise InvalidRole()

        return user

    @staticmethod
    def generate_token(user: User) -> dict[str, Any]:
        """
        Issue a signed session token for ``user``.

        The token asserts ``(user_id, name, email, role)`` and expires
        after ``SESSION_LIFETIME``.  No refresh token is issued: the
        client re-authenticates once the token expires.
        """
        token = AccessToken.for_user(user)
        token.set_exp(lifetime=SESSION_LIFETIME)
        token["name"] = user.name
        token["email"] = user.email
        token["role"] = user.role
        return {
            "access": str(token),
            "token_type": "Bearer",
            "expires_in": int(SESSION_LIFETIME.total_seconds()),
        }


# ═══════════════════════════════════════════════════════════════════
#  Current User Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:
    """Helpers for the ``/me/`` endpoint."""

    #: Profile fields a user may change on their own account.
    EDITABLE_FIELDS = ("first_name", "last_name", "phone_number", "dob", "location")

    @staticmethod
    def get_profile(user: User) -> User:
        """Return the user with its role profile pre-fetched."""
        return (
            User.objects
            .select_related("admin_profile", "administrative_profile")
            .get(pk=user.pk)
        )

    @staticmethod
    def update_profile(user: User, validated_data: dict[str, Any]) -> User:
        """Apply a partial update of the user's own editable fields."""
        update_fields = []
        for key, value in validated_data.items():
            if key not in CurrentUserService.EDITABLE_FIELDS:
                continue
            setattr(user, key, value)
            update_fields.append(key)

        if update_fields:
            user.save(update_fields=update_fields)
            logger.info(
                "User #%d updated own profile (fields: %s)",
                user.pk,
                ", ".join(update_fields),
            )
        return CurrentUserService.get_profile(user)


# ═══════════════════════════════════════════════════════════════════
#  User Directory Service
# ═══════════════════════════════════════════════════════════════════


class UserDirectoryService:
    """Searches users for the accused / victim pickers."""

    #: Upper bound on search results returned to the picker.
    MAX_RESULTS: int = 25

    @staticmethod
    def search_users(query: str | None = None, *, role: str | None = None) -> QuerySet[User]:
        """
        Case-insensitive substring search on first name, last name and
        email.  An empty query returns the first ``MAX_RESULTS`` users.
        """
        qs = User.objects.filter(is_active=True)
        if role:
            qs = qs.filter(role=role)
        if query:
            qs = qs.filter(
                Q(first_name__icontains=query)
                | Q(last_name__icontains=query)
                | Q(email__icontains=query)
            )
        return qs.order_by("first_name", "last_name", "pk")[: UserDirectoryService.MAX_RESULTS]


# ═══════════════════════════════════════════════════════════════════
#  Administrative (officer) Service
# ═══════════════════════════════════════════════════════════════════


class AdministrativeService:
    """
    Admin-only management of administrative (police) accounts.
    """

    @staticmethod
    def list_administratives(
        requesting_user: User,
        *,
        query: str | None = None,
    ) -> QuerySet[User]:
        """
        Return administrative users annotated with their case workload.

        Annotations
        -----------
        ``total_cases``   — crimes currently assigned to the officer.
        ``ongoing_cases`` — of those, crimes in Investigation or Pending.
        """
        require_role(
            requesting_user,
            UserRole.ADMIN,
            message="Only admins can manage administrative accounts.",
        )

        qs = (
            User.objects
            .filter(role=UserRole.ADMINISTRATIVE)
            .select_related("administrative_profile")
            .annotate(
                total_cases=Count("assigned_crimes", distinct=True),
                ongoing_cases=Count(
                    "assigned_crimes",
                    filter=Q(assigned_crimes__status__in=ONGOING_CRIME_STATUSES),
                    distinct=True,
                ),
            )
        )
        if query:
            qs = qs.filter(
                Q(first_name__icontains=query)
                | Q(last_name__icontains=query)
                | Q(email__icontains=query)
            )
        return qs.order_by("administrative_profile__badge_number", "pk")

    @staticmethod
    def create_administrative(
        validated_data: dict[str, Any],
        requesting_user: User,
    ) -> User:
        """
        Create an administrative user together with its profile.

        Parameters
        ----------
        validated_data : dict
            ``first_name``, ``last_name``, ``email``, ``password``,
            ``designation``, ``department`` (all required) and optionally
            ``phone_number``, ``location``.

        Raises
        ------
        PermissionDenied
            If the requester is not an Admin.
        Conflict
            If the email is already registered.
        """
        require_role(
            requesting_user,
            UserRole.ADMIN,
            message="Only admins can create administrative accounts.",
        )

        data = dict(validated_data)
        password = data.pop("password")
        designation = data.pop("designation")
        department = data.pop("department")
        email = User.objects.normalize_email(data.pop("email"))

        if User.objects.filter(email__iexact=email).exists():
            raise Conflict("A user with this email already exists.")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    role=UserRole.ADMINISTRATIVE,
                    **data,
                )
                AdministrativeProfile.objects.create(
                    user=user,
                    badge_number=AdministrativeService._next_badge_number(),
                    designation=designation,
                    department=department,
                )
        except IntegrityError:
            raise Conflict("Could not create the administrative account; email or badge number already taken.")

        logger.info(
            "Administrative user #%d created by admin %s",
            user.pk,
            requesting_user.email,
        )
        return (
            User.objects
            .select_related("administrative_profile")
            .get(pk=user.pk)
        )

    @staticmethod
    def _next_badge_number() -> int:
        current = AdministrativeProfile.objects.aggregate(max_badge=Max("badge_number"))["max_badge"]
        return FIRST_BADGE_NUMBER if current is None else current + 1
