"""
Media upload adapter.

A pass-through between the services and whatever storage backend
``STORAGES["default"]`` points at (local filesystem in development, a CDN
backend in production).  The adapter owns nothing: ``store`` returns a
durable URL that the calling service persists on its own record, and
``release`` deletes the remote object again when that record lets go of
it.

Release is best-effort.  A failing delete is logged and reported as
``False`` but never raised, so the mutation of the owning record still
goes through; orphaned media is the accepted cost.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import Mapping
from urllib.parse import unquote, urlparse

from django.conf import settings
from django.core.files.storage import Storage, default_storage
from django.core.files.uploadedfile import UploadedFile

from core.domain.exceptions import DomainError, UpstreamError

logger = logging.getLogger(__name__)

_JPEG = frozenset({"image/jpeg", "image/jpg", "image/pjpeg"})
_PNG = frozenset({"image/png"})
_PDF = frozenset({"application/pdf"})

#: Extension → accepted MIME types, for blog pictures.
IMAGE_UPLOAD_TYPES: Mapping[str, frozenset[str]] = {
    ".jpg": _JPEG,
    ".jpeg": _JPEG,
    ".png": _PNG,
}

#: Evidence photos may also be scanned documents.
EVIDENCE_UPLOAD_TYPES: Mapping[str, frozenset[str]] = {
    **IMAGE_UPLOAD_TYPES,
    ".pdf": _PDF,
}

EVIDENCE_FOLDER = "forensic-tracker/evidence"
BLOG_FOLDER = "forensic-tracker/blog"


class MediaUploadAdapter:
    """
    Validate uploads and hand them to the storage backend.

    Args:
        storage:   Storage backend; defaults to ``default_storage``.
        max_bytes: Size ceiling; defaults to ``settings.MEDIA_UPLOAD_MAX_BYTES``.
    """

    def __init__(self, storage: Storage | None = None, max_bytes: int | None = None) -> None:
        self.storage = storage if storage is not None else default_storage
        self.max_bytes = max_bytes if max_bytes is not None else settings.MEDIA_UPLOAD_MAX_BYTES

    def validate(self, upload: UploadedFile, allowed_types: Mapping[str, frozenset[str]]) -> str:
        """
        Check type and size; return the normalised file extension.

        Raises:
            DomainError: ``UnsupportedType`` when the extension or the MIME
                         type is outside ``allowed_types``; ``TooLarge``
                         above the size ceiling.
        """
        ext = os.path.splitext(upload.name or "")[1].lower()
        content_type = (getattr(upload, "content_type", "") or "").lower()
        accepted = allowed_types.get(ext)
        if accepted is None or content_type not in accepted:
            allowed = ", ".join(sorted(e.lstrip(".") for e in allowed_types))
            raise DomainError(
                f"Unsupported file type. Allowed types: {allowed}.",
                code="UnsupportedType",
            )
        if upload.size is not None and upload.size > self.max_bytes:
            raise DomainError(
                f"File too large. The limit is {self.max_bytes // (1024 * 1024)} MB.",
                code="TooLarge",
            )
        return ext

    def store(
        self,
        upload: UploadedFile,
        *,
        folder: str,
        allowed_types: Mapping[str, frozenset[str]],
    ) -> str:
        """
        Validate ``upload``, save it under ``folder`` and return its URL.

        Raises:
            DomainError:   ``UnsupportedType`` / ``TooLarge``.
            UpstreamError: The storage backend failed.
        """
        ext = self.validate(upload, allowed_types)
        name = f"{folder}/{uuid.uuid4().hex}{ext}"
        try:
            saved_name = self.storage.save(name, upload)
            url = self.storage.url(saved_name)
        except Exception as exc:
            logger.error("Media store failed for %s: %s", name, exc, exc_info=True)
            raise UpstreamError("Failed to store the uploaded file.") from exc

        logger.info("Stored media %s (%d bytes)", saved_name, upload.size or 0)
        return url

    def release(self, url: str | None) -> bool:
        """
        Best-effort delete of the object behind ``url``.

        Returns ``True`` when the backend accepted the delete, ``False``
        when there was nothing to release or the delete failed.
        """
        if not url:
            return False

        name = self.name_from_url(url)
        if name is None:
            logger.warning("Not releasing media %s: URL is not served by this storage", url)
            return False

        try:
            self.storage.delete(name)
        except Exception as exc:
            logger.warning("Media release failed for %s: %s", name, exc, exc_info=True)
            return False

        logger.info("Released media %s", name)
        return True

    def name_from_url(self, url: str) -> str | None:
        """Map a URL returned by ``store`` back to the storage object name."""
        base_path = urlparse(self.storage.url("")).path
        path = urlparse(url).path
        if not base_path or not path.startswith(base_path):
            return None
        name = unquote(path[len(base_path):]).lstrip("/")
        return name or None
