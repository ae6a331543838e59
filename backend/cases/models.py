"""
Cases app models.

A case is the anchor record of an investigation: it carries a unique
human-assigned identifier (``CASE-2024-017``), a location, the staff member
it is assigned to, and an append-only log of remarks.  Evidence hangs off
a case and is deleted with it.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import Remark, TimeStampedModel


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseStatus(models.TextChoices):
    """
    One-way lifecycle.  ``Open → In Progress → Closed`` or
    ``Open → Closed``; a closed case is never reopened.
    """

    OPEN = "Open", "Open"
    IN_PROGRESS = "In Progress", "In Progress"
    CLOSED = "Closed", "Closed"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Case(TimeStampedModel):
    """
    A forensic case.

    * Created by any authenticated staff member as ``Open``, assigned to
      its creator.
    * Only admins change its status, metadata or assignee.
    """

    case_id = models.CharField(
        max_length=100,
        unique=True,
        verbose_name="Case ID",
        help_text="Human-assigned identifier, unique across all cases.",
    )
    status = models.CharField(
        max_length=20,
        choices=CaseStatus.choices,
        default=CaseStatus.OPEN,
        verbose_name="Status",
        db_index=True,
    )
    date = models.DateTimeField(
        default=timezone.now,
        verbose_name="Date Opened",
    )
    location = models.CharField(
        max_length=500,
        verbose_name="Location",
    )
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cases",
        verbose_name="Assigned Staff",
    )

    class Meta:
        verbose_name = "Case"
        verbose_name_plural = "Cases"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.case_id} ({self.status})"

    @property
    def is_closed(self) -> bool:
        return self.status == CaseStatus.CLOSED


class CaseRemark(Remark):
    """Append-only note on a case."""

    case = models.ForeignKey(
        Case,
        on_delete=models.CASCADE,
        related_name="remarks",
        verbose_name="Case",
    )

    class Meta(Remark.Meta):
        verbose_name = "Case Remark"
        verbose_name_plural = "Case Remarks"
