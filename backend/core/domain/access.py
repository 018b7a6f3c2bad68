"""
core.domain.access — Role-scoped queryset selectors (shared patterns).

This module provides shared utilities that each app's service layer
calls to obtain querysets filtered by the requesting user's role.

╔══════════════════════════════════════════════════════════════════╗
║  IMPORTANT — Per-app scoping logic does NOT live here.         ║
║  Each app's ``services.py`` owns its own scope-rules dict.     ║
║  This module provides:                                         ║
║    1) ``apply_role_scope`` — role-keyed scope dispatch.        ║
║    2) ``require_role``     — guard that checks the role tag.   ║
║    3) ``get_user_role_name`` — informational role helper.      ║
╚══════════════════════════════════════════════════════════════════╝

Architecture overview
---------------------
Role-based data access follows a **scope-rule** pattern:

    ┌─────────┐      ┌────────────────┐      ┌──────────────────┐
    │  View   │─────▶│  App service   │─────▶│ core.domain      │
    │ (thin)  │      │ (owns logic)   │      │   .access        │
    └─────────┘      └────────────────┘      │ (shared helpers) │
                                             └──────────────────┘

Usage in an app's service layer::

    from core.domain.access import apply_role_scope

    CRIME_SCOPE_RULES = {
        UserRole.ADMIN:          lambda qs, u: qs,
        UserRole.ADMINISTRATIVE: lambda qs, u: qs.filter(administrative=u),
        UserRole.CIVILIAN:       lambda qs, u: qs.filter(reported_by=u),
    }

    qs = apply_role_scope(Crime.objects.all(), user, scope_rules=CRIME_SCOPE_RULES)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from django.db.models import QuerySet

from core.domain.exceptions import PermissionDenied

if TYPE_CHECKING:
    from accounts.models import User

# Type alias for a scope filter function.
# Takes (queryset, user) and returns a filtered queryset.
ScopeFilter = Callable[[QuerySet, "User"], QuerySet]

# Role value (``UserRole``) → filter function.
ScopeRules = dict[str, ScopeFilter]


def get_user_role_name(user: User) -> str | None:
    """
    Return the role tag of a user, or ``None`` for anonymous users.

    Used for JWT claims, API responses, and logging.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "role", None)


def apply_role_scope(
    queryset: QuerySet,
    user: User,
    *,
    scope_rules: ScopeRules,
    default: str = "none",
) -> QuerySet:
    """
    Apply the scope rule registered for the user's role.

    Args:
        queryset:     Base (unfiltered) queryset.
        user:         The authenticated user.
        scope_rules:  ``{role_value: filter_fn}`` mapping.
        default:      What to do when the role has no rule.
                      ``"none"`` (default) → empty queryset.
                      ``"all"`` → return unfiltered.

    Returns:
        The (possibly filtered) queryset.
    """
    role_name = get_user_role_name(user)

    if role_name and role_name in scope_rules:
        return scope_rules[role_name](queryset, user)

    if default == "none":
        return queryset.none()
    return queryset


def require_role(user: User, *allowed_roles: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` if the user's role is not
    among ``allowed_roles``.

    Example::

        require_role(user, UserRole.ADMIN, UserRole.ADMINISTRATIVE)
    """
    role_name = get_user_role_name(user)
    if role_name not in allowed_roles:
        raise PermissionDenied(
            message
            or f"Role '{role_name}' is not permitted for this operation. "
               f"Required: {', '.join(str(r) for r in allowed_roles)}."
        )
