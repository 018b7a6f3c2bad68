"""
Core app services — **Service Layer**.

Contains cross-app aggregation logic.  Views delegate all business
logic to the service classes defined here, keeping views thin and
ensuring testability.

╔══════════════════════════════════════════════════════════════════════╗
║  CROSS-APP IMPORT RULEBOOK                                         ║
║                                                                    ║
║  The core app is imported by every other app (exceptions, access   ║
║  helpers, constants).  To prevent circular imports at module load  ║
║  time:                                                             ║
║                                                                    ║
║  1. NEVER import models or services from other apps at the         ║
║     **module level**.  Import inside the method that needs them.   ║
║                                                                    ║
║  2. Preferred pattern:                                             ║
║       from django.apps import apps                                 ║
║       Crime = apps.get_model("crimes", "Crime")                    ║
║                                                                    ║
║  3. Choice/enum classes (e.g. CrimeStatus, Designation) live in    ║
║     the respective app's ``models.py``.  Import them lazily too.   ║
║                                                                    ║
║  4. For aggregations, prefer Django ORM ``.aggregate()`` and       ║
║     ``.values().annotate()`` over Python-side loops.               ║
╚══════════════════════════════════════════════════════════════════════╝
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from django.apps import apps
from django.db.models import Count, Q, QuerySet

from core.constants import ONGOING_CRIME_STATUSES

if TYPE_CHECKING:
    from accounts.models import User


# ════════════════════════════════════════════════════════════════════
#  Dashboard Aggregation Service
# ════════════════════════════════════════════════════════════════════

class DashboardAggregationService:
    """
    Produces an aggregated statistics dict consumed by
    ``DashboardStatsSerializer``.

    The statistics are **role-aware** and cover exactly the crimes the
    user can list:

    * **Admin**: every crime in the system.
    * **Administrative**: crimes assigned to the requesting officer.
    * **Civilian**: crimes the user reported or is a victim / accused in.
    """

    #: Maximum number of recent crime-log entries to return.
    RECENT_ACTIVITY_LIMIT: int = 20

    #: Maximum number of crime types listed in the breakdown.
    CRIME_TYPE_LIMIT: int = 10

    def __init__(self, user: User) -> None:
        self.user = user

    # ── Public API ──────────────────────────────────────────────────

    def get_stats(self) -> dict[str, Any]:
        """Return the full dashboard statistics dictionary."""
        from crimes.models import CrimeStatus

        crime_qs = self._get_crime_queryset()
        crime_ids = crime_qs.values("pk")
        Crime = apps.get_model("crimes", "Crime")
        base = Crime.objects.filter(pk__in=crime_ids)

        # Single aggregate query for scalar counts
        aggregates = base.aggregate(
            total_crimes=Count("id"),
            ongoing_crimes=Count("id", filter=Q(status__in=ONGOING_CRIME_STATUSES)),
            closed_crimes=Count("id", filter=Q(status=CrimeStatus.CLOSED)),
            unassigned_crimes=Count("id", filter=Q(administrative__isnull=True)),
        )

        Evidence = apps.get_model("evidence", "Evidence")
        total_evidence = Evidence.objects.filter(crime_id__in=crime_ids).count()

        return {
            "total_crimes": aggregates["total_crimes"],
            "ongoing_crimes": aggregates["ongoing_crimes"],
            "closed_crimes": aggregates["closed_crimes"],
            "unassigned_crimes": aggregates["unassigned_crimes"],
            "total_evidence": total_evidence,
            "total_administratives": self._get_administrative_count(),
            "crimes_by_status": self._get_crimes_by_status(base),
            "crimes_by_type": self._get_crimes_by_type(base),
            "recent_activity": self._get_recent_activity(crime_ids),
        }

    # ── Private helpers ─────────────────────────────────────────────

    def _get_crime_queryset(self) -> QuerySet:
        """Return a ``Crime`` queryset scoped to the requesting user's role."""
        from crimes.services import CrimeQueryService

        return CrimeQueryService.scoped_queryset(self.user)

    def _get_crimes_by_status(self, crime_qs: QuerySet) -> list[dict[str, Any]]:
        """Count per status, including statuses with zero crimes."""
        from crimes.models import CrimeStatus

        counts = dict(
            crime_qs
            .values("status")
            .annotate(count=Count("id"))
            .values_list("status", "count")
        )
        return [
            {"status": value, "label": str(label), "count": counts.get(value, 0)}
            for value, label in CrimeStatus.choices
        ]

    def _get_crimes_by_type(self, crime_qs: QuerySet) -> list[dict[str, Any]]:
        """Most frequent crime types first."""
        rows = (
            crime_qs
            .values("crime_type")
            .annotate(count=Count("id"))
            .order_by("-count", "crime_type")[: self.CRIME_TYPE_LIMIT]
        )
        return [{"crime_type": row["crime_type"], "count": row["count"]} for row in rows]

    def _get_recent_activity(self, crime_ids: QuerySet) -> list[dict[str, Any]]:
        """Return the latest crime-log entries on visible crimes."""
        CrimeLog = apps.get_model("crimes", "CrimeLog")

        logs = (
            CrimeLog.objects
            .filter(crime_id__in=crime_ids)
            .select_related("author")
            .order_by("-created_at", "-id")[: self.RECENT_ACTIVITY_LIMIT]
        )
        return [
            {
                "timestamp": log.created_at,
                "case_id": f"CR-{log.crime_id}",
                "crime": log.crime_id,
                "message": log.message,
                "actor": log.author.name if log.author else None,
            }
            for log in logs
        ]

    def _get_administrative_count(self) -> int:
        """Return the number of administrative (police) accounts."""
        from accounts.models import UserRole

        User = apps.get_model("accounts", "User")
        return User.objects.filter(role=UserRole.ADMINISTRATIVE, is_active=True).count()


# ════════════════════════════════════════════════════════════════════
#  System Constants Service
# ════════════════════════════════════════════════════════════════════

class SystemConstantsService:
    """
    Gathers all system-wide choice enumerations into a single dict for
    the frontend.

    This service is **stateless** — it does not depend on the requesting
    user.  All constants are public information needed by the frontend
    to render dropdowns and labels.
    """

    @staticmethod
    def get_constants() -> dict[str, Any]:
        """Return all system constants as a dict."""
        from accounts.models import Department, Designation, UserRole
        from crimes.models import CrimeStatus

        to_list = SystemConstantsService._choices_to_list

        return {
            "roles": to_list(UserRole),
            "crime_statuses": to_list(CrimeStatus),
            "ongoing_statuses": list(ONGOING_CRIME_STATUSES),
            "designations": to_list(Designation),
            "departments": to_list(Department),
        }

    @staticmethod
    def _choices_to_list(
        choices_class: type,
    ) -> list[dict[str, str]]:
        """
        Convert a Django ``TextChoices`` class to a list of
        ``{"value": ..., "label": ...}`` dicts.
        """
        return [
            {"value": str(value), "label": str(label)}
            for value, label in choices_class.choices
        ]
