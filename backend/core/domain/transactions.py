"""
core.domain.transactions — Helpers for safe multi-write updates.

Provides utilities that wrap ``select_for_update`` into reusable patterns
so that every app's service layer follows the same approach when a
single request performs several dependent writes on one row and its
relations.

Usage::

    from django.db import transaction
    from core.domain.transactions import lock_for_update

    with transaction.atomic():
        crime = lock_for_update(Crime, crime_id)
        ...
"""

from __future__ import annotations

from typing import Any, TypeVar

from django.db import models, transaction

from core.domain.exceptions import NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any, *, label: str | None = None) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Args:
        model_class: The Django model class.
        pk:          Primary key value.
        label:       Human-readable name used in the ``NotFound`` message
                     (defaults to the model class name).

    Returns:
        The locked model instance.

    Raises:
        NotFound: If no row with that PK exists.
        RuntimeError: If called outside a transaction.
    """
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("lock_for_update() must be called inside transaction.atomic().")
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{label or model_class.__name__} with id {pk} does not exist.")
