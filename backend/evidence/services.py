"""
Evidence app Service Layer.

This module is the **single source of truth** for all business logic
in the ``evidence`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``EvidenceQueryService``      — Evidence listing and retrieval, scoped
                                  to crimes the caller can see.
- ``EvidenceProcessingService`` — Create, partial update, delete and
                                  bulk delete.

Access Rules
------------
- Reading and adding evidence requires visibility of the owning crime
  (see ``crimes.services.CRIME_SCOPE_RULES``).
- Changing or deleting an item is allowed for an Admin, the
  Administrative assigned to the crime, or the user who submitted it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.db import transaction
from django.db.models import QuerySet

from core.constants import DEFAULT_EVIDENCE_FILENAME, DEFAULT_EVIDENCE_MIME
from core.domain.exceptions import NotFound, PermissionDenied
from crimes.models import Crime
from crimes.services import CrimeQueryService

from .models import Evidence

logger = logging.getLogger(__name__)


def _can_modify(evidence: Evidence, crime: Crime, user: Any) -> bool:
    if user.is_admin:
        return True
    if user.is_administrative and crime.administrative_id == user.pk:
        return True
    return evidence.submitted_by_id == user.pk


# ═══════════════════════════════════════════════════════════════════
#  Evidence Query Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceQueryService:
    """Evidence lookups restricted to crimes visible to the caller."""

    @staticmethod
    def list_for_crime(requesting_user: Any, crime_id: int) -> QuerySet[Evidence]:
        """
        All evidence attached to ``crime_id``.

        Raises ``NotFound`` if the crime is missing or not visible.
        """
        crime = CrimeQueryService.get_visible_crime(requesting_user, crime_id)
        return (
            Evidence.objects
            .filter(crime=crime)
            .select_related("submitted_by")
            .order_by("created_at", "pk")
        )

    @staticmethod
    def get_evidence_detail(requesting_user: Any, pk: int) -> Evidence:
        """Return one evidence item whose crime the caller can see."""
        visible_crimes = CrimeQueryService.scoped_queryset(requesting_user)
        evidence = (
            Evidence.objects
            .filter(pk=pk, crime__in=visible_crimes.values("pk"))
            .select_related("crime", "submitted_by")
            .first()
        )
        if evidence is None:
            raise NotFound(f"Evidence with id {pk} does not exist.")
        return evidence


# ═══════════════════════════════════════════════════════════════════
#  Evidence Processing Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceProcessingService:
    """
    Mutations on evidence items.  Each operation is independent of the
    other fields of the owning crime.
    """

    @staticmethod
    def create_evidence(validated_data: dict[str, Any], requesting_user: Any) -> Evidence:
        """
        Attach a new evidence item to a crime.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``EvidenceCreateSerializer``: ``crime``,
            ``title``, ``image`` (a ``DecodedImage``), ``mime``,
            ``filename`` and optionally ``description``.
        requesting_user : User
            Recorded as ``submitted_by``.
        """
        crime = CrimeQueryService.get_visible_crime(requesting_user, validated_data["crime"])
        image = validated_data["image"]

        evidence = Evidence.objects.create(
            crime=crime,
            title=validated_data["title"],
            description=validated_data.get("description", ""),
            image=image.content,
            mime=validated_data.get("mime") or image.mime or DEFAULT_EVIDENCE_MIME,
            filename=validated_data.get("filename") or DEFAULT_EVIDENCE_FILENAME,
            submitted_by=requesting_user,
        )
        logger.info(
            "Evidence #%d added to crime #%d by user %s",
            evidence.pk,
            crime.pk,
            requesting_user.email,
        )
        return evidence

    @staticmethod
    def update_evidence(pk: int, validated_data: dict[str, Any], requesting_user: Any) -> Evidence:
        """
        Partial update: only the keys present in ``validated_data`` are
        written.  A new image keeps the stored MIME type unless one is
        supplied or the data-URL header names one.
        """
        evidence = EvidenceQueryService.get_evidence_detail(requesting_user, pk)
        if not _can_modify(evidence, evidence.crime, requesting_user):
            raise PermissionDenied("You cannot change this evidence item.")

        update_fields: list[str] = []
        for field in ("title", "description", "mime", "filename"):
            if field in validated_data:
                setattr(evidence, field, validated_data[field])
                update_fields.append(field)

        if "image" in validated_data:
            image = validated_data["image"]
            evidence.image = image.content
            update_fields.append("image")
            if "mime" not in validated_data and image.mime:
                evidence.mime = image.mime
                update_fields.append("mime")

        evidence.save(update_fields=[*update_fields, "updated_at"])
        logger.info(
            "Evidence #%d updated by user %s (fields: %s)",
            evidence.pk,
            requesting_user.email,
            ", ".join(update_fields),
        )
        return evidence

    @staticmethod
    def delete_evidence(pk: int, requesting_user: Any) -> None:
        """Delete an evidence item permanently."""
        evidence = EvidenceQueryService.get_evidence_detail(requesting_user, pk)
        if not _can_modify(evidence, evidence.crime, requesting_user):
            raise PermissionDenied("You cannot delete this evidence item.")

        evidence_pk = evidence.pk
        evidence.delete()
        logger.info("Evidence #%d deleted by user %s", evidence_pk, requesting_user.email)

    @staticmethod
    def bulk_delete(crime_id: int, ids: Iterable[int], requesting_user: Any) -> int:
        """
        Remove the given evidence ids from one crime.

        Ids that do not belong to ``crime_id`` are ignored, so other
        crimes' evidence is never touched.  Unless the caller is an
        Admin or the assigned Administrative, every targeted row must
        have been submitted by the caller.

        Returns
        -------
        int
            Number of evidence rows deleted.
        """
        crime = CrimeQueryService.get_visible_crime(requesting_user, crime_id)
        targets = Evidence.objects.filter(crime=crime, pk__in=set(ids))

        with transaction.atomic():
            for evidence in targets.select_for_update():
                if not _can_modify(evidence, crime, requesting_user):
                    raise PermissionDenied(
                        f"You cannot delete evidence item {evidence.pk}."
                    )
            deleted, _ = targets.delete()

        logger.info(
            "%d evidence item(s) deleted from crime #%d by user %s",
            deleted,
            crime.pk,
            requesting_user.email,
        )
        return deleted
