"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO

import aiofiles

from app.application.dtos.asset import UploadedAsset
from app.infrastructure.exceptions import StoragePermissionError, StorageUploadError
from app.infrastructure.external.storage.protocol import (
    build_storage_ref,
    read_checked,
)

logger = logging.getLogger(__name__)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename,
    so a reader never sees a partial image. Files are served by whatever sits
    behind base_url.
    """

    def __init__(
        self,
        storage_root: str,
        base_url: str,
        max_size: int = 5 * 1024 * 1024,
        allowed_mime_types: str = "image/*",
    ) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/")
        self.max_size = max_size
        self.allowed_mime_types = allowed_mime_types
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    async def upload(
        self,
        file_data: BinaryIO,
        filename: str,
        content_type: str,
        owner_id: str,
    ) -> UploadedAsset:
        """Write the image under storage_root and return its public URL."""
        body = read_checked(file_data, content_type, self.max_size, self.allowed_mime_types)
        storage_ref = build_storage_ref(owner_id, filename)
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(body)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            logger.error("Local upload failed for %s: %s", storage_ref, e)
            raise StorageUploadError(storage_ref, str(e)) from e

        logger.info("Stored image %s (%d bytes)", storage_ref, len(body))
        return UploadedAsset(
            secure_url=f"{self.base_url}/{storage_ref}",
            storage_ref=storage_ref,
        )
