"""
Blog app service layer.

Services
--------
- ``BlogQueryService``   — list / retrieve posts.
- ``BlogPostService``    — admin create, edit and delete (with the picture).
- ``BlogCommentService`` — staff comments; admins may remove them.

Pictures follow the same policy as evidence photos: stored through
``core.media.MediaUploadAdapter`` before the row is written, released
best-effort after the row lets go of them.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import Count, Prefetch, QuerySet

from core.domain.access import require_admin
from core.domain.exceptions import NotFound
from core.domain.validators import require_text
from core.media import BLOG_FOLDER, IMAGE_UPLOAD_TYPES, MediaUploadAdapter

from .models import Blog, BlogComment

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("title", "content", "category")


def _store_picture(photo: UploadedFile) -> str:
    return MediaUploadAdapter().store(
        photo,
        folder=BLOG_FOLDER,
        allowed_types=IMAGE_UPLOAD_TYPES,
    )


def _blog_not_found(pk: int) -> NotFound:
    return NotFound(f"Blog post with id {pk} not found.")


class BlogQueryService:

    @staticmethod
    def get_filtered_queryset(filters: dict[str, Any]) -> QuerySet[Blog]:
        """Posts newest first, optionally restricted to one ``category``."""
        qs = Blog.objects.select_related("author").annotate(comment_count=Count("comments"))

        category = filters.get("category")
        if category:
            qs = qs.filter(category=category)

        return qs.order_by("-created_at", "-id")

    @staticmethod
    def get_blog_detail(pk: int) -> Blog:
        """
        Raises:
            NotFound: Unknown ``pk``.
        """
        try:
            return (
                Blog.objects
                .select_related("author")
                .prefetch_related(
                    Prefetch("comments", queryset=BlogComment.objects.select_related("author")),
                )
                .get(pk=pk)
            )
        except Blog.DoesNotExist:
            raise _blog_not_found(pk)


class BlogPostService:
    """Admin-only authoring."""

    @staticmethod
    def create_post(
        validated_data: dict[str, Any],
        requesting_user: Any,
        photo: UploadedFile | None = None,
    ) -> Blog:
        """
        Publish a post authored by ``requesting_user``.

        Raises:
            PermissionDenied: Caller is not an admin.
            DomainError:      ``UnsupportedType`` / ``TooLarge`` for a bad picture.
            UpstreamError:    The storage backend failed.
        """
        require_admin(requesting_user, "Only admins can publish blog posts.")

        photo_url = _store_picture(photo) if photo is not None else None
        try:
            blog = Blog.objects.create(
                title=validated_data["title"],
                content=validated_data["content"],
                category=validated_data["category"],
                author=requesting_user,
                photo=photo_url,
            )
        except Exception:
            MediaUploadAdapter().release(photo_url)
            raise

        logger.info("Blog post #%d published by admin #%d", blog.pk, requesting_user.pk)
        return BlogQueryService.get_blog_detail(blog.pk)

    @staticmethod
    def update_post(
        pk: int,
        validated_data: dict[str, Any],
        requesting_user: Any,
        photo: UploadedFile | None = None,
    ) -> Blog:
        """
        Edit ``title``, ``content`` and ``category``; empty values keep
        the current value.  A new picture replaces and releases the old one.

        Raises:
            NotFound: Unknown ``pk``.
        """
        require_admin(requesting_user, "Only admins can edit blog posts.")

        if not Blog.objects.filter(pk=pk).exists():
            raise _blog_not_found(pk)

        new_photo_url = _store_picture(photo) if photo is not None else None
        old_photo_url = None

        with transaction.atomic():
            blog = Blog.objects.select_for_update().get(pk=pk)
            update_fields = []
            for field in _EDITABLE_FIELDS:
                value = validated_data.get(field)
                if value:
                    setattr(blog, field, value)
                    update_fields.append(field)

            if new_photo_url is not None:
                old_photo_url = blog.photo
                blog.photo = new_photo_url
                update_fields.append("photo")

            if update_fields:
                blog.save(update_fields=update_fields + ["updated_at"])

        if old_photo_url:
            MediaUploadAdapter().release(old_photo_url)

        logger.info(
            "Blog post #%s updated by admin #%d (fields: %s)",
            pk, requesting_user.pk, ", ".join(update_fields) or "none",
        )
        return BlogQueryService.get_blog_detail(pk)

    @staticmethod
    def delete_post(pk: int, requesting_user: Any) -> None:
        """
        Delete a post with its comments and release its picture.

        Raises:
            NotFound: Unknown ``pk``.
        """
        require_admin(requesting_user, "Only admins can delete blog posts.")

        with transaction.atomic():
            try:
                blog = Blog.objects.select_for_update().get(pk=pk)
            except Blog.DoesNotExist:
                raise _blog_not_found(pk)
            photo_url = blog.photo
            blog.delete()

        if photo_url:
            MediaUploadAdapter().release(photo_url)
        logger.info("Blog post #%s deleted by admin #%d", pk, requesting_user.pk)


class BlogCommentService:

    @staticmethod
    def add_comment(pk: int, content: str | None, requesting_user: Any) -> Blog:
        """
        Raises:
            DomainError: ``EmptyComment`` if ``content`` is blank.
            NotFound:    Unknown ``pk``.
        """
        content = require_text(content, code="EmptyComment", message="Comment content is required.")
        if not Blog.objects.filter(pk=pk).exists():
            raise _blog_not_found(pk)

        comment = BlogComment.objects.create(blog_id=pk, author=requesting_user, content=content)
        logger.info("Comment #%d added to blog post #%s by staff #%d", comment.pk, pk, requesting_user.pk)
        return BlogQueryService.get_blog_detail(pk)

    @staticmethod
    def delete_comment(pk: int, comment_pk: int, requesting_user: Any) -> Blog:
        """
        Remove one comment from a post.

        Raises:
            NotFound: Unknown post, or no such comment on that post.
        """
        require_admin(requesting_user, "Only admins can delete comments.")

        if not Blog.objects.filter(pk=pk).exists():
            raise _blog_not_found(pk)
        deleted, _ = BlogComment.objects.filter(pk=comment_pk, blog_id=pk).delete()
        if not deleted:
            raise NotFound(f"Comment with id {comment_pk} not found on blog post {pk}.")

        logger.info("Comment #%s removed from blog post #%s by admin #%d", comment_pk, pk, requesting_user.pk)
        return BlogQueryService.get_blog_detail(pk)
