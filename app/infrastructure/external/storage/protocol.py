"""Asset storage protocol (DIP). Implementations: LocalStorageService, S3StorageService."""

from fnmatch import fnmatch
from pathlib import PurePosixPath
from typing import BinaryIO, Protocol

from app.application.dtos.asset import UploadedAsset
from app.domain.exceptions import ValidationException
from app.shared.utils.generators import generate_cuid


class AssetStorageProtocol(Protocol):
    """Protocol for post image backends (local, S3-compatible)."""

    async def upload(
        self,
        file_data: BinaryIO,
        filename: str,
        content_type: str,
        owner_id: str,
    ) -> UploadedAsset:
        """Store the image and return its public URL."""
        ...


def read_checked(
    file_data: BinaryIO,
    content_type: str,
    max_size: int,
    allowed_mime_types: str,
) -> bytes:
    """Read upload body, enforcing size and MIME limits.

    allowed_mime_types is a comma-separated list of patterns (e.g. "image/*").

    Raises:
        ValidationException: Wrong type, empty file or file too large.
    """
    patterns = [p.strip() for p in allowed_mime_types.split(",") if p.strip()]
    if not any(fnmatch((content_type or "").lower(), p.lower()) for p in patterns):
        raise ValidationException(
            f"Unsupported file type: {content_type or 'unknown'}", field="image"
        )
    body = file_data.read(max_size + 1)
    if not body:
        raise ValidationException("Image file is empty", field="image")
    if len(body) > max_size:
        raise ValidationException(
            f"Image exceeds maximum size of {max_size} bytes", field="image"
        )
    return body


def build_storage_ref(owner_id: str, filename: str) -> str:
    """Return posts/{owner}/{cuid}{ext}; the original name only contributes its extension."""
    suffix = PurePosixPath(filename or "").suffix.lower()
    if not suffix[1:].isalnum():
        suffix = ""
    return f"posts/{owner_id}/{generate_cuid()}{suffix}"
