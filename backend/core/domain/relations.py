"""
core.domain.relations — Set reconciliation for many-to-many relations.

A full-replace update must leave a many-to-many relation equal to
exactly the submitted id set.  Instead of clearing the relation and
re-adding every id, ``reconcile_many_to_many`` computes the add/remove
diffs against the current state and writes only the difference.

The helper performs several writes; call it inside ``transaction.atomic()``
together with the other writes of the same update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class RelationDiff:
    """Outcome of a reconciliation: which ids were linked and unlinked."""

    added: frozenset[int] = field(default_factory=frozenset)
    removed: frozenset[int] = field(default_factory=frozenset)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def compute_relation_diff(current_ids: Iterable[int], target_ids: Iterable[int]) -> RelationDiff:
    """Return the ids to add and remove to turn ``current_ids`` into ``target_ids``."""
    current = frozenset(current_ids)
    target = frozenset(target_ids)
    return RelationDiff(added=target - current, removed=current - target)


def reconcile_many_to_many(manager, target_ids: Iterable[int]) -> RelationDiff:
    """
    Make the related manager's id set equal ``target_ids``.

    Args:
        manager:    A many-to-many related manager (e.g. ``crime.accused``).
        target_ids: The complete desired set of related primary keys.

    Returns:
        The ``RelationDiff`` that was applied.
    """
    current_ids = manager.values_list("pk", flat=True)
    diff = compute_relation_diff(current_ids, target_ids)
    if diff.removed:
        manager.remove(*diff.removed)
    if diff.added:
        manager.add(*diff.added)
    return diff
