"""Local-directory stand-in for public blob storage.

Each area (photos, reports, documents) is a subdirectory under
``<state_dir>/blobs``. References are ``file://`` URIs so the image
fetcher can resolve them the same way it resolves remote URLs.
"""

import re
import time
from pathlib import Path
from uuid import uuid4

from loguru import logger

from pmtracker.domain.errors import StorageError, UploadError
from pmtracker.domain.ports.blob_store_port import (
    DocumentStorePort,
    PhotoStorePort,
    ReportStorePort,
)
from pmtracker.infrastructure.persistence.atomic_io import atomic_write

PHOTOS_AREA = "pm-photos"
REPORTS_AREA = "reports"
DOCUMENTS_AREA = "documents"

_UNSAFE = re.compile(r"[^\w.-]+")


def _safe_name(file_name: str, fallback: str) -> str:
    return _UNSAFE.sub("_", Path(file_name).name) or fallback


def _unique_prefix() -> str:
    return f"{int(time.time() * 1000)}-{uuid4().hex[:8]}"


class LocalBlobStore(PhotoStorePort, ReportStorePort, DocumentStorePort):
    def __init__(self, blobs_dir: Path) -> None:
        self.blobs_dir = blobs_dir

    async def _put(self, area: str, name: str, content: bytes) -> str:
        path = self.blobs_dir / area / name
        await atomic_write(path, content)
        return path.resolve().as_uri()

    async def upload(self, data: bytes, content_type: str, file_name: str) -> str:
        name = f"{_unique_prefix()}-{_safe_name(file_name, 'pm_photo.jpg')}"
        try:
            ref = await self._put(PHOTOS_AREA, name, data)
        except OSError as e:
            raise UploadError(f"Photo upload failed: {e}") from e
        logger.info("Uploaded photo {} ({} bytes, {})", ref, len(data), content_type)
        return ref

    async def store(self, content: bytes, filename: str) -> str:
        name = f"{_unique_prefix()}-{_safe_name(filename, 'report.pdf')}"
        try:
            ref = await self._put(REPORTS_AREA, name, content)
        except OSError as e:
            raise StorageError(f"Report storage failed: {e}") from e
        logger.info("Stored report {} ({} bytes)", ref, len(content))
        return ref

    async def store_document(self, content: bytes, filename: str) -> str:
        name = f"{_unique_prefix()}-{_safe_name(filename, 'pm.pdf')}"
        try:
            ref = await self._put(DOCUMENTS_AREA, name, content)
        except OSError as e:
            raise UploadError(f"Document upload failed: {e}") from e
        logger.info("Stored document {}", ref)
        return ref
