"""
Core app serializers.

**Response-only** serializers for the aggregated endpoints served by the
core app.  These serializers define the *output schema* for the
dashboard and system constants views.  They do **not** accept input
data.

Architectural note
------------------
These serializers never import models from other apps.  They work
exclusively with plain Python dicts / lists produced by the service
layer, keeping the core app decoupled from ``crimes``, ``evidence`` and
``accounts``.
"""

from __future__ import annotations

from rest_framework import serializers


# ════════════════════════════════════════════════════════════════════
#  Dashboard Statistics
# ════════════════════════════════════════════════════════════════════

class CrimesByStatusSerializer(serializers.Serializer):
    status = serializers.CharField(help_text="Status value, e.g. 'investigation'.")
    label = serializers.CharField(help_text="Display label, e.g. 'Investigation'.")
    count = serializers.IntegerField()


class CrimesByTypeSerializer(serializers.Serializer):
    crime_type = serializers.CharField()
    count = serializers.IntegerField()


class RecentActivitySerializer(serializers.Serializer):
    """
    A single crime-log entry for the dashboard feed.

    Example::

        {
            "timestamp": "2025-06-15T10:30:00Z",
            "case_id": "CR-12",
            "crime": 12,
            "message": "Crime details updated by Jane Doe.",
            "actor": "Jane Doe"
        }
    """

    timestamp = serializers.DateTimeField()
    case_id = serializers.CharField()
    crime = serializers.IntegerField()
    message = serializers.CharField()
    actor = serializers.CharField(allow_null=True, allow_blank=True)


class DashboardStatsSerializer(serializers.Serializer):
    """
    Top-level response serializer for ``GET /api/core/dashboard/``.

    Counts cover the crimes the caller can list (see
    ``DashboardAggregationService``).
    """

    # ── Scalar counters ──────────────────────────────────────────────
    total_crimes = serializers.IntegerField()
    ongoing_crimes = serializers.IntegerField(
        help_text="Crimes in Investigation or Pending.",
    )
    closed_crimes = serializers.IntegerField()
    unassigned_crimes = serializers.IntegerField(
        help_text="Crimes with no assigned administrative user.",
    )
    total_evidence = serializers.IntegerField()
    total_administratives = serializers.IntegerField(
        help_text="Active administrative (police) accounts.",
    )

    # ── Nested breakdowns ────────────────────────────────────────────
    crimes_by_status = CrimesByStatusSerializer(many=True)
    crimes_by_type = CrimesByTypeSerializer(many=True)
    recent_activity = RecentActivitySerializer(many=True)


# ════════════════════════════════════════════════════════════════════
#  System Constants / Enums
# ════════════════════════════════════════════════════════════════════

class ChoiceItemSerializer(serializers.Serializer):
    """
    A single key-label pair representing one choice/enum option.

    Example::

        {"value": "investigation", "label": "Investigation"}
    """

    value = serializers.CharField(
        help_text="Machine-readable value to send in API requests.",
    )
    label = serializers.CharField(
        help_text="Human-readable display label for the UI.",
    )


class SystemConstantsSerializer(serializers.Serializer):
    """
    Top-level response serializer for ``GET /api/core/constants/``.

    Response shape::

        {
            "roles": [{"value": "civilian", "label": "Civilian"}, ...],
            "crime_statuses": [...],
            "ongoing_statuses": ["investigation", "pending"],
            "designations": [...],
            "departments": [...]
        }
    """

    roles = ChoiceItemSerializer(many=True)
    crime_statuses = ChoiceItemSerializer(many=True)
    ongoing_statuses = serializers.ListField(child=serializers.CharField())
    designations = ChoiceItemSerializer(many=True)
    departments = ChoiceItemSerializer(many=True)
