# tests/test_file_storage.py
"""Unit tests for the local-disk attachment store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import re
from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from fleet.exceptions import ValidationError
from fleet.services.file_storage import DOCUMENT, INVOICE, PHOTO, FileStorage, has_file


def make_upload(filename="scan.pdf", content=b"%PDF-1.4 test", content_type="application/pdf"):
    return UploadFile(file=BytesIO(content), filename=filename, headers=Headers({"content-type": content_type}))


@pytest.fixture
def store(tmp_path):
    return FileStorage(str(tmp_path / "blobs"), max_bytes=1024)


class TestValidate:
    def test_accepts_pdf_document(self, store):
        store.validate(make_upload(), DOCUMENT, "file")

    def test_photo_rejects_pdf(self, store):
        with pytest.raises(ValidationError) as exc:
            store.validate(make_upload(), PHOTO, "before_photo")
        assert exc.value.errors == {"before_photo": ["The before_photo must be a file of type: JPG, JPEG, or PNG."]}

    def test_rejects_mismatched_content_type(self, store):
        with pytest.raises(ValidationError):
            store.validate(make_upload("scan.pdf", content_type="text/plain"), DOCUMENT, "file")

    def test_rejects_oversized(self, store):
        upload = make_upload(content=b"x" * 1025)
        with pytest.raises(ValidationError) as exc:
            store.validate(upload, INVOICE, "invoice")
        assert "not be greater than 1 kilobytes" in exc.value.errors["invoice"][0]

    def test_validate_leaves_stream_rewound(self, store):
        upload = make_upload()
        store.validate(upload, DOCUMENT, "file")
        assert upload.file.tell() == 0


class TestSaveAndDelete:
    def test_save_names_blob_by_kind(self, store):
        path = store.save(make_upload("Photo.PNG", b"png", "image/png"), PHOTO)
        assert re.fullmatch(r"exchange_photos/photo_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}_[A-Za-z0-9]{8}\.png", path)
        assert store.exists(path)
        with open(os.path.join(store.root, path), "rb") as f:
            assert f.read() == b"png"

    def test_discard_on_error_removes_new_blobs(self, store):
        path = store.save(make_upload(), DOCUMENT)
        with pytest.raises(RuntimeError):
            with store.discard_on_error(path, None):
                raise RuntimeError("commit failed")
        assert not store.exists(path)

    def test_discard_on_error_keeps_blobs_on_success(self, store):
        path = store.save(make_upload(), DOCUMENT)
        with store.discard_on_error(path):
            pass
        assert store.exists(path)

    def test_delete_missing_is_fine(self, store):
        assert store.delete("documents/never_there.pdf")
        assert store.delete(None)

    def test_delete_outside_root_is_refused(self, store):
        assert store.delete("../../etc/passwd") is False

    def test_is_writable_creates_root(self, store):
        assert store.is_writable()
        assert os.path.isdir(store.root)


class TestHasFile:
    def test_none_and_empty_filename(self):
        assert not has_file(None)
        assert not has_file(make_upload(filename=""))
        assert has_file(make_upload())
