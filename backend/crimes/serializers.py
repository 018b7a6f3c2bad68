"""
Crimes app serializers.

Request serializers validate payload shape only; referenced ids are
checked against the database by ``services.py`` so that the whole
payload is rejected before any write.  Response serializers expect the
querysets built by ``CrimeQueryService`` (related rows pre-fetched).
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from evidence.serializers import EvidenceItemSerializer, EvidenceSerializer

from .models import Crime, CrimeLog, CrimeStatus, Location


# ── Involvement labels ──────────────────────────────────────────────
INVOLVEMENT_ACCUSED = "Accused"
INVOLVEMENT_VICTIM = "Victim"
INVOLVEMENT_REPORTER = "Reporter"
INVOLVEMENT_ASSIGNED = "Assigned"
INVOLVEMENT_NONE = "None"

UNASSIGNED_LABEL = "Unassigned"


def resolve_involvement(crime: Crime, user) -> str:
    """
    How ``user`` is involved in ``crime``.

    Checked in order: accused, victim, reporter, assignee.  Relies on
    ``accused`` / ``victims`` being prefetched.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return INVOLVEMENT_NONE
    if any(u.pk == user.pk for u in crime.accused.all()):
        return INVOLVEMENT_ACCUSED
    if any(u.pk == user.pk for u in crime.victims.all()):
        return INVOLVEMENT_VICTIM
    if crime.reported_by_id == user.pk:
        return INVOLVEMENT_REPORTER
    if crime.administrative_id == user.pk:
        return INVOLVEMENT_ASSIGNED
    return INVOLVEMENT_NONE


# ═══════════════════════════════════════════════════════════════════
#  Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class CrimeFilterSerializer(serializers.Serializer):
    """
    Query parameters for ``GET /api/crimes/``.

    ``search`` matches title, crime type, description, case id
    (``CR-12`` or ``12``), city, state and country.
    """

    status = serializers.ChoiceField(choices=CrimeStatus.choices, required=False)
    crime_type = serializers.CharField(required=False, max_length=100)
    search = serializers.CharField(required=False, max_length=255, allow_blank=True)


# ═══════════════════════════════════════════════════════════════════
#  Nested Serializers
# ═══════════════════════════════════════════════════════════════════


class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ["city", "state", "country"]


class CrimeLogSerializer(serializers.ModelSerializer):
    author_name = serializers.SerializerMethodField()

    class Meta:
        model = CrimeLog
        fields = ["id", "message", "author", "author_name", "created_at"]
        read_only_fields = fields

    def get_author_name(self, obj: CrimeLog) -> str | None:
        return obj.author.name if obj.author else None


# ═══════════════════════════════════════════════════════════════════
#  Read Serializers
# ═══════════════════════════════════════════════════════════════════


class CrimeListSerializer(serializers.ModelSerializer):
    """
    One row of the crimes table.

    Pass ``context={"user": request.user}`` so ``involvement`` can be
    computed for the caller.
    """

    case_id = serializers.CharField(read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    location = serializers.SerializerMethodField()
    reported_by_name = serializers.CharField(source="reported_by.name", read_only=True)
    administrative_name = serializers.SerializerMethodField()
    involvement = serializers.SerializerMethodField()

    class Meta:
        model = Crime
        fields = [
            "id",
            "case_id",
            "title",
            "crime_type",
            "status",
            "status_display",
            "date_occurred",
            "location",
            "reported_by_name",
            "administrative",
            "administrative_name",
            "involvement",
        ]
        read_only_fields = fields

    def get_location(self, obj: Crime) -> str:
        location = getattr(obj, "location", None)
        return str(location) if location else ""

    def get_administrative_name(self, obj: Crime) -> str:
        return obj.administrative.name if obj.administrative else UNASSIGNED_LABEL

    def get_involvement(self, obj: Crime) -> str:
        return resolve_involvement(obj, self.context.get("user"))


class CrimeDetailSerializer(serializers.ModelSerializer):
    """Full crime view: people, location, evidence and the log."""

    case_id = serializers.CharField(read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    location = LocationSerializer(read_only=True)
    reported_by = UserSummarySerializer(read_only=True)
    administrative = UserSummarySerializer(read_only=True, allow_null=True)
    administrative_name = serializers.SerializerMethodField()
    accused = UserSummarySerializer(many=True, read_only=True)
    victims = UserSummarySerializer(many=True, read_only=True)
    evidence = EvidenceSerializer(many=True, read_only=True)
    logs = CrimeLogSerializer(many=True, read_only=True)
    involvement = serializers.SerializerMethodField()

    class Meta:
        model = Crime
        fields = [
            "id",
            "case_id",
            "title",
            "crime_type",
            "description",
            "status",
            "status_display",
            "date_occurred",
            "location",
            "reported_by",
            "administrative",
            "administrative_name",
            "accused",
            "victims",
            "evidence",
            "logs",
            "involvement",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_administrative_name(self, obj: Crime) -> str:
        return obj.administrative.name if obj.administrative else UNASSIGNED_LABEL

    def get_involvement(self, obj: Crime) -> str:
        return resolve_involvement(obj, self.context.get("user"))


# ═══════════════════════════════════════════════════════════════════
#  Write Serializers
# ═══════════════════════════════════════════════════════════════════


class _CrimeFieldsSerializer(serializers.Serializer):
    """Fields shared by the report and update payloads."""

    title = serializers.CharField(min_length=10, max_length=255)
    crime_type = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    date_occurred = serializers.DateTimeField()
    location = LocationSerializer()

    def validate_crime_type(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("This field may not be blank.")
        return value


def _dedupe(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class CrimeReportSerializer(_CrimeFieldsSerializer):
    """
    Request body for ``POST /api/crimes/``.

    ``accused_ids`` / ``victim_ids`` are user PKs; existence is checked
    in the service layer.  ``evidence`` items carry base64 images.
    """

    accused_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        default=list,
    )
    victim_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        default=list,
    )
    evidence = EvidenceItemSerializer(many=True, required=False, default=list)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs["accused_ids"] = _dedupe(attrs.get("accused_ids", []))
        attrs["victim_ids"] = _dedupe(attrs.get("victim_ids", []))
        return attrs


class CrimeUpdateSerializer(_CrimeFieldsSerializer):
    """
    Request body for ``PUT /api/crimes/{id}/`` (full replacement).

    ``accused_ids`` and ``victim_ids`` are the complete desired sets.
    ``administrative_id`` is optional: omit it to keep the current
    assignee, send ``null`` to unassign.  ``log_message`` overrides the
    generated change summary written to the crime log.
    """

    status = serializers.ChoiceField(choices=CrimeStatus.choices)
    accused_ids = serializers.ListField(child=serializers.IntegerField(min_value=1))
    victim_ids = serializers.ListField(child=serializers.IntegerField(min_value=1))
    administrative_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    log_message = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        attrs["accused_ids"] = _dedupe(attrs["accused_ids"])
        attrs["victim_ids"] = _dedupe(attrs["victim_ids"])
        return attrs
