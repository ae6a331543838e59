"""Unit tests for ``core.media.MediaUploadAdapter``."""

from __future__ import annotations

from unittest import mock

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile

from core.domain.exceptions import DomainError, UpstreamError
from core.media import (
    EVIDENCE_FOLDER,
    EVIDENCE_UPLOAD_TYPES,
    IMAGE_UPLOAD_TYPES,
    MediaUploadAdapter,
)


@pytest.fixture()
def storage(tmp_path):
    return FileSystemStorage(location=str(tmp_path), base_url="/media/")


@pytest.fixture()
def adapter(storage):
    return MediaUploadAdapter(storage=storage, max_bytes=64)


def _upload(name="photo.jpg", content=b"jpeg-bytes", content_type="image/jpeg"):
    return SimpleUploadedFile(name, content, content_type=content_type)


class TestStore:

    def test_store_returns_url_under_folder(self, adapter, storage):
        url = adapter.store(_upload(), folder=EVIDENCE_FOLDER, allowed_types=EVIDENCE_UPLOAD_TYPES)

        assert url.startswith("/media/forensic-tracker/evidence/")
        assert url.endswith(".jpg")
        assert storage.exists(adapter.name_from_url(url))

    def test_each_upload_gets_a_fresh_name(self, adapter):
        first = adapter.store(_upload(), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)
        second = adapter.store(_upload(), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)

        assert first != second

    def test_uppercase_extension_is_accepted(self, adapter):
        url = adapter.store(
            _upload("SCAN.PNG", content_type="image/png"),
            folder="f",
            allowed_types=IMAGE_UPLOAD_TYPES,
        )

        assert url.endswith(".png")

    @pytest.mark.parametrize(
        "name,content_type",
        [
            ("notes.txt", "text/plain"),
            ("photo.jpg", "text/html"),
            ("scan.pdf", "application/pdf"),
            ("noextension", "image/png"),
        ],
    )
    def test_unsupported_type(self, adapter, name, content_type):
        with pytest.raises(DomainError) as excinfo:
            adapter.validate(_upload(name, content_type=content_type), IMAGE_UPLOAD_TYPES)

        assert excinfo.value.code == "UnsupportedType"

    def test_pdf_allowed_for_evidence(self, adapter):
        assert adapter.validate(_upload("scan.pdf", content_type="application/pdf"), EVIDENCE_UPLOAD_TYPES) == ".pdf"

    def test_too_large(self, adapter, storage, tmp_path):
        with pytest.raises(DomainError) as excinfo:
            adapter.store(_upload(content=b"x" * 65), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)

        assert excinfo.value.code == "TooLarge"
        assert not any(tmp_path.iterdir())

    def test_storage_failure_becomes_upstream_error(self, adapter, storage):
        with mock.patch.object(storage, "save", side_effect=OSError("disk full")):
            with pytest.raises(UpstreamError):
                adapter.store(_upload(), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)


class TestRelease:

    def test_release_deletes_object(self, adapter, storage):
        url = adapter.store(_upload(), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)

        assert adapter.release(url) is True
        assert not storage.exists(adapter.name_from_url(url))

    def test_release_nothing(self, adapter):
        assert adapter.release(None) is False
        assert adapter.release("") is False

    def test_foreign_url_is_left_alone(self, adapter, storage):
        with mock.patch.object(storage, "delete") as delete:
            assert adapter.release("https://cdn.example.com/other/photo.jpg") is False

        delete.assert_not_called()

    def test_failed_delete_is_swallowed(self, adapter, storage):
        url = adapter.store(_upload(), folder="f", allowed_types=IMAGE_UPLOAD_TYPES)

        with mock.patch.object(storage, "delete", side_effect=OSError("cdn down")):
            assert adapter.release(url) is False

    def test_name_from_url(self, adapter):
        assert adapter.name_from_url("/media/forensic-tracker/blog/a%20b.png") == "forensic-tracker/blog/a b.png"
        assert adapter.name_from_url("/static/x.png") is None
