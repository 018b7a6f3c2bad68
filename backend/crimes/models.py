"""
Crimes app models.

Covers the case store: a reported ``Crime`` with exactly one
``Location``, the accused and victim user sets, an optional
administrative assignee, and the append-only ``CrimeLog`` that records
every change made to the case.  Evidence items live in the
``evidence`` app and point back to their crime.
"""

from django.conf import settings
from django.db import models

from core.domain.exceptions import Conflict
from core.models import TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CrimeStatus(models.TextChoices):
    """
    Lifecycle status of a crime.

    There is no enforced transition table: an authorized caller may set
    any value on update.  ``INVESTIGATION`` and ``PENDING`` count as
    *ongoing* on the officer dashboards.
    """

    REPORTED = "reported", "Reported"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"
    INVESTIGATION = "investigation", "Investigation"
    PENDING = "pending", "Pending"
    CLOSED = "closed", "Closed"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Crime(TimeStampedModel):
    """
    Central entity of the system — a reported crime (case).

    * Reported by any authenticated user; starts in ``REPORTED``.
    * Status, relations and the assignee are changed only by Admin and
      Administrative users through the full-replace update workflow.
    * Never hard-deleted through the API.
    """

    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    crime_type = models.CharField(
        max_length=100,
        db_index=True,
        verbose_name="Crime Type",
        help_text="Free-text category, e.g. 'Theft' or 'Fraud'.",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    date_occurred = models.DateTimeField(
        verbose_name="Date Occurred",
    )
    status = models.CharField(
        max_length=20,
        choices=CrimeStatus.choices,
        default=CrimeStatus.REPORTED,
        db_index=True,
        verbose_name="Status",
    )

    # ── People ──────────────────────────────────────────────────────
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reported_crimes",
        verbose_name="Reported By",
    )
    administrative = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_crimes",
        limit_choices_to={"role": "administrative"},
        verbose_name="Assigned Administrative",
    )
    accused = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="crimes_accused",
        verbose_name="Accused",
    )
    victims = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="crimes_victimized",
        verbose_name="Victims",
    )

    class Meta:
        verbose_name = "Crime"
        verbose_name_plural = "Crimes"
        ordering = ["-date_occurred", "-id"]
        indexes = [
            models.Index(fields=["status", "crime_type"], name="crime_status_type_idx"),
        ]

    def __str__(self):
        return f"{self.case_id} {self.title}"

    @property
    def case_id(self) -> str:
        """Human-facing case reference, e.g. ``CR-42``."""
        return f"CR-{self.pk}"


class Location(TimeStampedModel):
    """Where a crime occurred.  Owned one-to-one by its crime."""

    crime = models.OneToOneField(
        Crime,
        on_delete=models.CASCADE,
        related_name="location",
        verbose_name="Crime",
    )
    city = models.CharField(max_length=120, verbose_name="City")
    state = models.CharField(max_length=120, verbose_name="State")
    country = models.CharField(max_length=120, verbose_name="Country")

    class Meta:
        verbose_name = "Location"
        verbose_name_plural = "Locations"

    def __str__(self):
        return f"{self.city}, {self.state}, {self.country}"


class CrimeLog(TimeStampedModel):
    """
    Append-only log of textual updates on a crime.

    Rows are created by the service layer and never changed afterwards:
    saving an existing row or deleting one raises ``Conflict``.
    """

    crime = models.ForeignKey(
        Crime,
        on_delete=models.CASCADE,
        related_name="logs",
        verbose_name="Crime",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="crime_log_entries",
        verbose_name="Author",
    )
    message = models.TextField(verbose_name="Message")

    class Meta:
        verbose_name = "Crime Log"
        verbose_name_plural = "Crime Logs"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"CR-{self.crime_id} log #{self.pk}"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise Conflict("Crime log entries are append-only.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise Conflict("Crime log entries cannot be deleted.")
