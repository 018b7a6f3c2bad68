"""
Evidence app models.

An ``Evidence`` item is an image attached to a crime, together with a
title, a description and the user who submitted it.  The image is
stored as raw bytes plus its MIME type and original filename; it
travels over the API as base64 (see ``evidence.fields``).
"""

from django.conf import settings
from django.db import models

from core.constants import DEFAULT_EVIDENCE_FILENAME, DEFAULT_EVIDENCE_MIME
from core.models import TimeStampedModel


class Evidence(TimeStampedModel):
    """
    Evidence item owned by a ``Crime``.

    Created, updated and deleted independently of the other fields of
    its crime.  No versioning and no soft-delete.
    """

    crime = models.ForeignKey(
        "crimes.Crime",
        on_delete=models.CASCADE,
        related_name="evidence",
        verbose_name="Crime",
    )
    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    image = models.BinaryField(
        null=True,
        blank=True,
        verbose_name="Image",
    )
    mime = models.CharField(
        max_length=100,
        default=DEFAULT_EVIDENCE_MIME,
        verbose_name="MIME Type",
    )
    filename = models.CharField(
        max_length=255,
        default=DEFAULT_EVIDENCE_FILENAME,
        verbose_name="Filename",
    )
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="submitted_evidence",
        verbose_name="Submitted By",
    )

    class Meta:
        verbose_name = "Evidence"
        verbose_name_plural = "Evidence"
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.title} (CR-{self.crime_id})"
