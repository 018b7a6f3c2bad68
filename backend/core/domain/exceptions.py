"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ Meaning                      │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ Business-rule violation      │ 400  │
│ ReferentialError    │ Related id does not exist    │ 400  │
│ AuthenticationError │ Sign-in rejected             │ 401  │
│   UserNotFound      │   unknown email              │ 401  │
│   InvalidPassword   │   password mismatch          │ 401  │
│   InvalidRole       │   claimed role mismatch      │ 401  │
│ PermissionDenied    │ Wrong role / not assigned    │ 403  │
│ NotFound            │ Missing or invisible id      │ 404  │
│ Conflict            │ Duplicate / append-only      │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import ReferentialError

    if missing_ids:
        raise ReferentialError(
            f"Unknown accused user id(s): {sorted(missing_ids)}."
        )
"""

from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    ``code`` is a short machine-readable tag echoed back to the client.
    """

    default_code = "DOMAIN_ERROR"

    def __init__(self, message: str = "A business rule was violated.", *, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)


class ReferentialError(DomainError):
    """
    A payload references a related record (user, crime) that does not
    exist or does not have the expected role.

    Maps to HTTP 400.
    """

    default_code = "INVALID_REFERENCE"

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        missing_ids: Iterable[int] | None = None,
    ) -> None:
        self.field = field
        self.missing_ids = sorted(missing_ids) if missing_ids is not None else []
        if message is None:
            message = "One or more referenced records do not exist"
            if field:
                message += f" ({field}"
                if self.missing_ids:
                    message += f": {', '.join(str(i) for i in self.missing_ids)}"
                message += ")"
            message += "."
        super().__init__(message)


class AuthenticationError(DomainError):
    """
    Sign-in was rejected.  Subclasses name the specific reason so the
    client can tell them apart.

    Maps to HTTP 401.
    """

    default_code = "AUTHENTICATION_FAILED"

    def __init__(self, message: str = "Invalid credentials.") -> None:
        super().__init__(message)


class UserNotFound(AuthenticationError):
    """No user is registered with the submitted email."""

    default_code = "USER_NOT_FOUND"

    def __init__(self, message: str = "No user is registered with this email.") -> None:
        super().__init__(message)


class InvalidPassword(AuthenticationError):
    """The submitted password does not match the stored hash."""

    default_code = "INVALID_PASSWORD"

    def __init__(self, message: str = "The password is incorrect.") -> None:
        super().__init__(message)


class InvalidRole(AuthenticationError):
    """The claimed role differs from the role stored for the user."""

    default_code = "INVALID_ROLE"

    def __init__(self, message: str = "The selected role does not match this account.") -> None:
        super().__init__(message)


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required role, or is not
    assigned to the resource being changed.

    Maps to HTTP 403.
    """

    default_code = "PERMISSION_DENIED"

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist (or is not visible to the
    requesting user given their role scope).

    Maps to HTTP 404.
    """

    default_code = "NOT_FOUND"

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: duplicate email on registration, attempt to rewrite
    an append-only crime log entry.  Maps to HTTP 409.
    """

    default_code = "CONFLICT"

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)
