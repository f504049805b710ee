# fleet/services/file_storage.py
"""
Local-disk blob store for uploaded attachments: vehicle documents, maintenance
invoices and exchange photos.

Blobs are addressed by their path relative to STORAGE_ROOT, e.g.
    documents/doc_2026-10-19_08-30-00_a1B2c3D4.pdf
which is what the database stores.

A blob written for a record is discarded again if the record fails to commit,
and a blob the record no longer points at is deleted only after the commit.
"""

import os
import secrets
import shutil
import string
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional

from fastapi import UploadFile

from fleet.config import settings
from fleet.exceptions import FileStorageError, ValidationError
from fleet.utils.logger import get_logger

logger = get_logger(__name__)

_RANDOM_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class UploadKind:
    directory: str
    prefix: str
    extensions: frozenset
    mime_types: frozenset
    label: str


DOCUMENT = UploadKind(
    directory="documents",
    prefix="doc",
    extensions=frozenset({"pdf", "jpg", "jpeg", "png"}),
    mime_types=frozenset({"application/pdf", "image/jpeg", "image/jpg", "image/png"}),
    label="PDF, JPG, JPEG, or PNG",
)
INVOICE = UploadKind(
    directory="invoices",
    prefix="inv",
    extensions=DOCUMENT.extensions,
    mime_types=DOCUMENT.mime_types,
    label=DOCUMENT.label,
)
PHOTO = UploadKind(
    directory="exchange_photos",
    prefix="photo",
    extensions=frozenset({"jpg", "jpeg", "png"}),
    mime_types=frozenset({"image/jpeg", "image/jpg", "image/png"}),
    label="JPG, JPEG, or PNG",
)


def has_file(upload: Optional[UploadFile]) -> bool:
    """Multipart clients send an empty part when no file is chosen."""
    return upload is not None and bool(upload.filename)


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lstrip(".").lower()


def _size(stream: BinaryIO) -> int:
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class FileStorage:
    def __init__(self, root: str, max_bytes: int = settings.MAX_UPLOAD_BYTES):
        self.root = root
        self.max_bytes = max_bytes

    def _full_path(self, path: str) -> str:
        full = os.path.abspath(os.path.join(self.root, path))
        if not full.startswith(os.path.abspath(self.root) + os.sep):
            raise FileStorageError(f"Path escapes storage root: {path}")
        return full

    def validate(self, upload: UploadFile, kind: UploadKind, field: str):
        """Raise ValidationError keyed by the form field if the upload is not acceptable."""
        ext = _extension(upload.filename or "")
        content_type = (upload.content_type or "").lower()
        if ext not in kind.extensions or (content_type and content_type not in kind.mime_types):
            raise ValidationError.for_field(field, f"The {field} must be a file of type: {kind.label}.")
        if _size(upload.file) > self.max_bytes:
            raise ValidationError.for_field(
                field, f"The {field} must not be greater than {self.max_bytes // 1024} kilobytes."
            )

    def save(self, upload: UploadFile, kind: UploadKind) -> str:
        """Write the upload under kind.directory and return its relative path."""
        timestamp = datetime.utcnow().strftime("%Y-%m-%d_%H-%M-%S")
        random_part = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(8))
        filename = f"{kind.prefix}_{timestamp}_{random_part}.{_extension(upload.filename)}"
        relative = f"{kind.directory}/{filename}"
        full = self._full_path(relative)

        try:
            os.makedirs(os.path.dirname(full), exist_ok=True)
            upload.file.seek(0)
            with open(full, "wb") as f:
                shutil.copyfileobj(upload.file, f)
        except OSError as e:
            logger.error(f"[STORAGE] Failed writing {relative}: {e}")
            raise FileStorageError() from e

        logger.info(f"[STORAGE] Saved {relative}")
        return relative

    def delete(self, path: Optional[str]) -> bool:
        """Remove a blob. Missing blobs count as deleted; I/O errors are logged, not raised."""
        if not path:
            return True
        try:
            os.remove(self._full_path(path))
            logger.info(f"[STORAGE] Deleted {path}")
        except FileNotFoundError:
            pass
        except (OSError, FileStorageError) as e:
            logger.warning(f"[STORAGE] Could not delete {path}: {e}")
            return False
        return True

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._full_path(path))

    @contextmanager
    def discard_on_error(self, *paths: Optional[str]):
        """Remove freshly written blobs if the wrapped database write fails."""
        try:
            yield
        except Exception:
            for path in paths:
                self.delete(path)
            raise

    def is_writable(self) -> bool:
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError:
            return False
        return os.access(self.root, os.W_OK)


storage = FileStorage(settings.STORAGE_ROOT)


def get_storage() -> FileStorage:
    """FastAPI dependency; tests override it with a temporary root."""
    return storage
