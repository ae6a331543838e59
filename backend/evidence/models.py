"""
Evidence app models.

An evidence item belongs to exactly one ``Case`` and is deleted with it.
``photo`` holds the durable URL returned by the media upload adapter; the
file itself lives in the storage backend, not in the database.
"""

from django.conf import settings
from django.db import models

from core.models import Remark, TimeStampedModel


class Evidence(TimeStampedModel):
    """
    A single seized / collected item.

    ``uploaded_by`` is the only staff member (besides admins, through
    their own edit path) allowed to change ``item``, ``description`` and
    ``location``.  ``created_at`` doubles as the evidence timestamp.
    """

    case = models.ForeignKey(
        "cases.Case",
        on_delete=models.CASCADE,
        related_name="evidence",
        verbose_name="Case",
    )
    item = models.CharField(
        max_length=255,
        verbose_name="Item",
    )
    description = models.TextField(
        verbose_name="Description",
    )
    location = models.CharField(
        max_length=500,
        verbose_name="Location Found",
    )
    photo = models.URLField(
        max_length=500,
        null=True,
        blank=True,
        verbose_name="Photo URL",
    )
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="uploaded_evidence",
        verbose_name="Uploaded By",
    )

    class Meta:
        verbose_name = "Evidence"
        verbose_name_plural = "Evidence"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Evidence #{self.pk}: {self.item}"


class EvidenceRemark(Remark):
    """Append-only note on an evidence item."""

    evidence = models.ForeignKey(
        Evidence,
        on_delete=models.CASCADE,
        related_name="remarks",
        verbose_name="Evidence",
    )

    class Meta(Remark.Meta):
        verbose_name = "Evidence Remark"
        verbose_name_plural = "Evidence Remarks"
