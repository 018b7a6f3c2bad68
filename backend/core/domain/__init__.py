"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF exception handler translating those exceptions.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.
access             Role-scoped queryset selectors and role guards.
relations          Set reconciliation for many-to-many relations.

Usage from any app::

    from core.domain.exceptions import DomainError, NotFound
    from core.domain.transactions import lock_for_update
    from core.domain.access import apply_role_scope, require_role
    from core.domain.relations import reconcile_many_to_many
"""
