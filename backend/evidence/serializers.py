"""
Evidence app serializers.

Contains all Request and Response serializers for the Evidence API.
Serializers handle field definitions, read/write constraints, and
field-level validation only.  **No business logic or permission checks
live here** — those belong in ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Evidence read serializers
3. Evidence write serializers (create, partial update, bulk delete)
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from .fields import Base64ImageField
from .models import Evidence


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceFilterSerializer(serializers.Serializer):
    """
    Query parameters for ``GET /api/evidence/``.

    ``crime`` : int — PK of the owning crime (required).
    """

    crime = serializers.IntegerField(min_value=1, help_text="PK of the owning crime.")


# ═══════════════════════════════════════════════════════════════════
#  2. Evidence Read Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceSerializer(serializers.ModelSerializer):
    """
    Evidence item with its image as bare base64.

    ``submitted_by_name`` falls back to ``"Unknown User"`` when the
    submitting account no longer exists.
    """

    image = Base64ImageField(read_only=True)
    submitted_by_name = serializers.SerializerMethodField()

    class Meta:
        model = Evidence
        fields = [
            "id",
            "crime",
            "title",
            "description",
            "image",
            "mime",
            "filename",
            "submitted_by",
            "submitted_by_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_submitted_by_name(self, obj: Evidence) -> str:
        if obj.submitted_by is None:
            return "Unknown User"
        return obj.submitted_by.name


# ═══════════════════════════════════════════════════════════════════
#  3. Evidence Write Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceItemSerializer(serializers.Serializer):
    """
    One evidence item embedded in a crime report.

    ``mime`` / ``filename`` may be omitted; the MIME type is then taken
    from the data-URL header or falls back to the model default.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    image = Base64ImageField()
    mime = serializers.CharField(required=False, max_length=100)
    filename = serializers.CharField(required=False, max_length=255)


class EvidenceCreateSerializer(serializers.Serializer):
    """Request body for ``POST /api/evidence/``; every field but ``description`` is required."""

    crime = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    image = Base64ImageField()
    mime = serializers.CharField(max_length=100)
    filename = serializers.CharField(max_length=255)


class EvidenceUpdateSerializer(serializers.Serializer):
    """
    Request body for ``PATCH /api/evidence/{id}/``.

    Every field is optional; only fields present in the request are
    applied.  The owning crime and the submitter cannot be changed.
    """

    title = serializers.CharField(required=False, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    image = Base64ImageField(required=False)
    mime = serializers.CharField(required=False, max_length=100)
    filename = serializers.CharField(required=False, max_length=255)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update.")
        return attrs


class EvidenceBulkDeleteSerializer(serializers.Serializer):
    """Request body for ``POST /api/evidence/bulk-delete/``."""

    crime = serializers.IntegerField(min_value=1)
    ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
    )
