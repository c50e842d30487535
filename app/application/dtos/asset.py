"""DTOs for uploaded post assets."""

from dataclasses import dataclass
from typing import BinaryIO


@dataclass(frozen=True)
class UploadedAsset:
    """Result of an asset upload: public URL plus backend-specific reference."""

    secure_url: str
    storage_ref: str


@dataclass(frozen=True)
class AssetUpload:
    """An image supplied with a new post, before upload."""

    file_data: BinaryIO
    filename: str
    content_type: str
