"""Asset storage interface (port) for uploaded post images."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from app.application.dtos.asset import UploadedAsset


class IAssetStorage(Protocol):
    """Protocol for uploading post images to external storage."""

    async def upload(
        self,
        file_data: BinaryIO,
        filename: str,
        content_type: str,
        owner_id: str,
    ) -> UploadedAsset:
        """Upload file and return its public URL. Raises StorageUploadError on failure."""
