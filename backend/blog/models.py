"""
Blog app models.

Admin-authored articles for the staff, each with an optional picture
(URL from the media upload adapter) and a flat list of staff comments.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class BlogCategory(models.TextChoices):
    FORENSICS = "Forensics", "Forensics"
    CYBERCRIME = "Cybercrime", "Cybercrime"
    TECHNOLOGY = "Technology", "Technology"
    CASE_STUDIES = "Case Studies", "Case Studies"
    OTHER = "Other", "Other"


class Blog(TimeStampedModel):
    """A blog post.  ``created_at`` doubles as the publication timestamp."""

    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    content = models.TextField(
        verbose_name="Content",
    )
    category = models.CharField(
        max_length=20,
        choices=BlogCategory.choices,
        verbose_name="Category",
        db_index=True,
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="blog_posts",
        verbose_name="Author",
    )
    photo = models.URLField(
        max_length=500,
        null=True,
        blank=True,
        verbose_name="Photo URL",
    )

    class Meta:
        verbose_name = "Blog Post"
        verbose_name_plural = "Blog Posts"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.title


class BlogComment(models.Model):
    blog = models.ForeignKey(
        Blog,
        on_delete=models.CASCADE,
        related_name="comments",
        verbose_name="Blog Post",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="+",
        verbose_name="Author",
    )
    content = models.TextField(verbose_name="Content")
    timestamp = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Timestamp",
    )

    class Meta:
        verbose_name = "Blog Comment"
        verbose_name_plural = "Blog Comments"
        ordering = ["timestamp", "id"]

    def __str__(self):
        return f"Comment #{self.pk} on blog #{self.blog_id}"
