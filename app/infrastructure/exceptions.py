"""Infrastructure exceptions for asset storage.

Storage errors extend PostlineException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import PostlineException


class StorageException(PostlineException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed; the message carries the backend's reason."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload image: {reason}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path},
        )
        self.reason = reason


class StoragePermissionError(StorageException):
    """Storage reference escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
