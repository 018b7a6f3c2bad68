"""
Crimes app Service Layer.

This module is the **single source of truth** for all business logic
in the ``crimes`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``CrimeQueryService``   — Role-scoped, filtered querysets and lookups.
- ``CrimeReportService``  — Reporting a new crime (with location, people
                            and evidence) in one transaction.
- ``CrimeUpdateService``  — The full-replace case update workflow.
- ``CrimeLogService``     — Appending to and reading the crime log.

Update Workflow Overview
------------------------
  1. Authorize       Admin → any crime
                     Administrative → only crimes assigned to them
                     Civilian → never
  2. Validate refs   every accused / victim id exists, the assignee
                     (if any) is an Administrative user
  3. Write (atomic)  lock crime row → re-check step 1 →
                     scalar fields → location →
                     reconcile accused / victims → assignee →
                     one CrimeLog entry

Step 2 completes before any write so a bad reference never leaves a
half-applied update.  Concurrent updates are last-write-wins.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Prefetch, Q, QuerySet

from accounts.models import UserRole
from core.constants import DEFAULT_EVIDENCE_FILENAME, DEFAULT_EVIDENCE_MIME
from core.domain.access import ScopeRules, apply_role_scope, require_role
from core.domain.exceptions import NotFound, PermissionDenied, ReferentialError
from core.domain.relations import reconcile_many_to_many
from core.domain.transactions import lock_for_update
from evidence.models import Evidence

from .models import Crime, CrimeLog, CrimeStatus, Location

User = get_user_model()
logger = logging.getLogger(__name__)

#: Matches a case reference typed into the search box: ``CR-12`` or ``12``.
_CASE_ID_RE = re.compile(r"^(?:CR-?)?(\d+)$", re.IGNORECASE)

#: Scalar fields replaced wholesale by an update.
_SCALAR_FIELDS = ("title", "crime_type", "description", "date_occurred", "status")
_LOCATION_FIELDS = ("city", "state", "country")


# ═══════════════════════════════════════════════════════════════════
#  Role scoping
# ═══════════════════════════════════════════════════════════════════

#: Which crimes each role may see.
CRIME_SCOPE_RULES: ScopeRules = {
    UserRole.ADMIN: lambda qs, u: qs,
    UserRole.ADMINISTRATIVE: lambda qs, u: qs.filter(administrative=u),
    UserRole.CIVILIAN: lambda qs, u: qs.filter(
        Q(reported_by=u) | Q(victims=u) | Q(accused=u)
    ).distinct(),
}


# ═══════════════════════════════════════════════════════════════════
#  Crime Query Service
# ═══════════════════════════════════════════════════════════════════


class CrimeQueryService:
    """
    Constructs role-scoped, filtered querysets for crimes.
    """

    @staticmethod
    def scoped_queryset(requesting_user: Any) -> QuerySet[Crime]:
        """All crimes visible to ``requesting_user`` (no filters applied)."""
        return apply_role_scope(
            Crime.objects.all(),
            requesting_user,
            scope_rules=CRIME_SCOPE_RULES,
        )

    @staticmethod
    def get_filtered_queryset(
        requesting_user: Any,
        filters: dict[str, Any],
    ) -> QuerySet[Crime]:
        """
        Build the crime listing for ``requesting_user``.

        Parameters
        ----------
        requesting_user : User
            Determines the visibility scope (see ``CRIME_SCOPE_RULES``).
        filters : dict
            Cleaned data from ``CrimeFilterSerializer``:
            - ``status``     : str — exact ``CrimeStatus`` value
            - ``crime_type`` : str — case-insensitive exact match
            - ``search``     : str — substring on title, type,
              description, city, state, country, or a case id

        Returns
        -------
        QuerySet[Crime]
            Ordered newest occurrence first, with the rows needed by
            ``CrimeListSerializer`` pre-fetched.
        """
        qs = CrimeQueryService.scoped_queryset(requesting_user)

        status = filters.get("status")
        if status:
            qs = qs.filter(status=status)

        crime_type = filters.get("crime_type")
        if crime_type:
            qs = qs.filter(crime_type__iexact=crime_type)

        search = (filters.get("search") or "").strip()
        if search:
            q = (
                Q(title__icontains=search)
                | Q(crime_type__icontains=search)
                | Q(description__icontains=search)
                | Q(location__city__icontains=search)
                | Q(location__state__icontains=search)
                | Q(location__country__icontains=search)
            )
            case_match = _CASE_ID_RE.match(search)
            if case_match:
                q |= Q(pk=int(case_match.group(1)))
            qs = qs.filter(q)

        return (
            qs
            .select_related("location", "reported_by", "administrative")
            .prefetch_related("accused", "victims")
            .order_by("-date_occurred", "-pk")
        )

    @staticmethod
    def get_crime_detail(requesting_user: Any, crime_id: int) -> Crime:
        """
        Return one crime with everything the detail view renders.

        Raises ``NotFound`` if the crime does not exist **or** is not
        visible to the caller, so existence is not leaked.
        """
        qs = (
            CrimeQueryService.scoped_queryset(requesting_user)
            .select_related(
                "location",
                "reported_by",
                "administrative",
            )
            .prefetch_related(
                "accused",
                "victims",
                Prefetch("evidence", queryset=Evidence.objects.select_related("submitted_by")),
                Prefetch("logs", queryset=CrimeLog.objects.select_related("author")),
            )
        )
        try:
            return qs.get(pk=crime_id)
        except Crime.DoesNotExist:
            raise NotFound(f"Crime with id {crime_id} does not exist.")

    @staticmethod
    def get_visible_crime(requesting_user: Any, crime_id: int) -> Crime:
        """Return the bare crime row if the caller may see it, else ``NotFound``."""
        crime = CrimeQueryService.scoped_queryset(requesting_user).filter(pk=crime_id).first()
        if crime is None:
            raise NotFound(f"Crime with id {crime_id} does not exist.")
        return crime


# ═══════════════════════════════════════════════════════════════════
#  Reference validation helpers
# ═══════════════════════════════════════════════════════════════════


def _validate_user_ids(field: str, ids: Iterable[int]) -> None:
    """Raise ``ReferentialError`` if any id in ``ids`` is not a user."""
    wanted = set(ids)
    if not wanted:
        return
    found = set(User.objects.filter(pk__in=wanted).values_list("pk", flat=True))
    missing = wanted - found
    if missing:
        raise ReferentialError(field=field, missing_ids=missing)


def _validate_administrative_id(administrative_id: int | None) -> None:
    """Raise ``ReferentialError`` unless the id names an Administrative user."""
    if administrative_id is None:
        return
    exists = User.objects.filter(
        pk=administrative_id,
        role=UserRole.ADMINISTRATIVE,
    ).exists()
    if not exists:
        raise ReferentialError(
            f"User {administrative_id} does not exist or is not an administrative user.",
            field="administrative_id",
            missing_ids=[administrative_id],
        )


# ═══════════════════════════════════════════════════════════════════
#  Crime Log Service
# ═══════════════════════════════════════════════════════════════════


class CrimeLogService:
    """Append-only access to the crime log."""

    @staticmethod
    def append(crime: Crime, author: Any, message: str) -> CrimeLog:
        return CrimeLog.objects.create(crime=crime, author=author, message=message)

    @staticmethod
    def list_logs(requesting_user: Any, crime_id: int) -> QuerySet[CrimeLog]:
        """Newest-first log of a crime visible to ``requesting_user``."""
        crime = CrimeQueryService.get_visible_crime(requesting_user, crime_id)
        return (
            CrimeLog.objects
            .filter(crime=crime)
            .select_related("author")
            .order_by("-created_at", "-pk")
        )


# ═══════════════════════════════════════════════════════════════════
#  Crime Report Service
# ═══════════════════════════════════════════════════════════════════


class CrimeReportService:
    """Reporting a new crime.  Any authenticated user may report."""

    @staticmethod
    def report_crime(validated_data: dict[str, Any], requesting_user: Any) -> Crime:
        """
        Create a crime together with its location, accused / victim
        links, evidence items and the initial log entry.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``CrimeReportSerializer``.
        requesting_user : User
            Becomes ``reported_by``.

        Raises
        ------
        ReferentialError
            If any accused or victim id does not exist.  Raised before
            anything is written.
        """
        data = dict(validated_data)
        location_data = data.pop("location")
        accused_ids = data.pop("accused_ids", [])
        victim_ids = data.pop("victim_ids", [])
        evidence_items = data.pop("evidence", [])

        _validate_user_ids("accused_ids", accused_ids)
        _validate_user_ids("victim_ids", victim_ids)

        with transaction.atomic():
            crime = Crime.objects.create(
                status=CrimeStatus.REPORTED,
                reported_by=requesting_user,
                **data,
            )
            Location.objects.create(crime=crime, **location_data)
            if accused_ids:
                crime.accused.add(*accused_ids)
            if victim_ids:
                crime.victims.add(*victim_ids)

            Evidence.objects.bulk_create([
                Evidence(
                    crime=crime,
                    title=item["title"],
                    description=item.get("description", ""),
                    image=item["image"].content,
                    mime=item.get("mime") or item["image"].mime or DEFAULT_EVIDENCE_MIME,
                    filename=item.get("filename") or DEFAULT_EVIDENCE_FILENAME,
                    submitted_by=requesting_user,
                )
                for item in evidence_items
            ])

            CrimeLogService.append(crime, requesting_user, f"Crime reported by {requesting_user.name}.")

        logger.info(
            "Crime #%d reported by user %s (%d accused, %d victims, %d evidence)",
            crime.pk,
            requesting_user.email,
            len(accused_ids),
            len(victim_ids),
            len(evidence_items),
        )
        return CrimeQueryService.get_crime_detail(requesting_user, crime.pk)


# ═══════════════════════════════════════════════════════════════════
#  Crime Update Service
# ═══════════════════════════════════════════════════════════════════


class CrimeUpdateService:
    """
    The full-replace case update workflow.

    Design Pattern: Validate-then-Apply
    -----------------------------------
    Authorization and every referenced id are checked before the first
    write.  All writes then happen inside one transaction holding a row
    lock on the crime, so either the whole update is visible or none of
    it is.  Authorization is checked again on the locked row, since an
    Admin may have reassigned the crime in the meantime.
    """

    @staticmethod
    def update_crime(
        crime_id: int,
        validated_data: dict[str, Any],
        requesting_user: Any,
    ) -> Crime:
        """
        Replace a crime's fields and relations.

        Parameters
        ----------
        crime_id : int
            PK of the crime to update.
        validated_data : dict
            Cleaned data from ``CrimeUpdateSerializer``.
        requesting_user : User
            Must be an Admin, or the Administrative assigned to the crime.

        Returns
        -------
        Crime
            The updated crime, loaded for ``CrimeDetailSerializer``.

        Raises
        ------
        PermissionDenied
            Caller is a Civilian, an Administrative not assigned to the
            crime, or an Administrative trying to change the assignee.
        NotFound
            No crime with ``crime_id``.
        ReferentialError
            An accused / victim id does not exist, or
            ``administrative_id`` is not an Administrative user.
        """
        require_role(
            requesting_user,
            UserRole.ADMIN,
            UserRole.ADMINISTRATIVE,
            message="Only admins and administrative users can update crimes.",
        )

        crime = Crime.objects.filter(pk=crime_id).first()
        if crime is None:
            raise NotFound(f"Crime with id {crime_id} does not exist.")

        assignee_submitted = "administrative_id" in validated_data
        new_assignee_id = validated_data.get("administrative_id")
        CrimeUpdateService._authorize(crime, requesting_user, assignee_submitted, new_assignee_id)

        accused_ids = validated_data["accused_ids"]
        victim_ids = validated_data["victim_ids"]
        _validate_user_ids("accused_ids", accused_ids)
        _validate_user_ids("victim_ids", victim_ids)
        if assignee_submitted:
            _validate_administrative_id(new_assignee_id)

        with transaction.atomic():
            crime = lock_for_update(Crime, crime_id, label="Crime")
            # The assignee may have changed since the unlocked read above.
            CrimeUpdateService._authorize(crime, requesting_user, assignee_submitted, new_assignee_id)
            changes: list[str] = []

            # ── Scalar fields ───────────────────────────────────────
            for field in _SCALAR_FIELDS:
                if field not in validated_data:
                    continue
                new_value = validated_data[field]
                if getattr(crime, field) != new_value:
                    changes.append(CrimeUpdateService._describe_change(crime, field, new_value))
                    setattr(crime, field, new_value)

            # ── Assignee ────────────────────────────────────────────
            if assignee_submitted and new_assignee_id != crime.administrative_id:
                crime.administrative_id = new_assignee_id
                changes.append("assignee changed" if new_assignee_id else "assignee removed")

            crime.save()

            # ── Location ────────────────────────────────────────────
            location_data = validated_data["location"]
            location, created = Location.objects.get_or_create(
                crime=crime,
                defaults=dict(location_data),
            )
            if not created:
                location_changed = False
                for field in _LOCATION_FIELDS:
                    if getattr(location, field) != location_data[field]:
                        setattr(location, field, location_data[field])
                        location_changed = True
                if location_changed:
                    location.save()
                    changes.append("location changed")

            # ── People ──────────────────────────────────────────────
            accused_diff = reconcile_many_to_many(crime.accused, accused_ids)
            if accused_diff.changed:
                changes.append(
                    f"accused +{len(accused_diff.added)}/-{len(accused_diff.removed)}"
                )
            victims_diff = reconcile_many_to_many(crime.victims, victim_ids)
            if victims_diff.changed:
                changes.append(
                    f"victims +{len(victims_diff.added)}/-{len(victims_diff.removed)}"
                )

            # ── Log ─────────────────────────────────────────────────
            message = (validated_data.get("log_message") or "").strip()
            if not message:
                message = CrimeUpdateService._summarize(requesting_user, changes)
            CrimeLogService.append(crime, requesting_user, message)

        logger.info(
            "Crime #%d updated by user %s (%s)",
            crime.pk,
            requesting_user.email,
            "; ".join(changes) or "no field changes",
        )
        return CrimeQueryService.get_crime_detail(requesting_user, crime.pk)

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _authorize(
        crime: Crime,
        requesting_user: Any,
        assignee_submitted: bool,
        new_assignee_id: int | None,
    ) -> None:
        if requesting_user.is_admin:
            return
        if crime.administrative_id != requesting_user.pk:
            raise PermissionDenied("This crime is not assigned to you.")
        if assignee_submitted and new_assignee_id != crime.administrative_id:
            raise PermissionDenied("Only admins can change the assigned administrative user.")

    @staticmethod
    def _describe_change(crime: Crime, field: str, new_value: Any) -> str:
        if field == "status":
            return (
                f"status {crime.get_status_display()} → "
                f"{CrimeStatus(new_value).label}"
            )
        return f"{field.replace('_', ' ')} changed"

    @staticmethod
    def _summarize(author: Any, changes: list[str]) -> str:
        message = f"Crime details updated by {author.name}"
        if changes:
            return f"{message}: {'; '.join(changes)}."
        return f"{message}."
