"""Asset storage for post images: local filesystem and S3-compatible backends.

Factory creates the backend from app.core.config. The S3 implementation is
imported only when selected, so boto3 is not loaded for local storage.
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.protocol import AssetStorageProtocol

__all__ = [
    "AssetStorageProtocol",
    "StorageFactory",
]
