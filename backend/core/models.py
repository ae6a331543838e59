"""
Core app models.

Provides abstract base models shared across the project.
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


class Remark(models.Model):
    """
    Abstract append-only note written by a staff member.

    Concrete subclasses add the FK to the record they annotate (a case or
    an evidence item).  Remarks are never edited or deleted through the
    API; the service layers only ever ``create`` them.
    """

    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="+",
        verbose_name="Written By",
    )
    text = models.TextField(verbose_name="Text")
    timestamp = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Timestamp",
    )

    class Meta:
        abstract = True
        ordering = ["timestamp", "id"]

    def __str__(self):
        return f"Remark #{self.pk} by staff #{self.staff_id}"
