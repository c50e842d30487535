"""S3-compatible object storage (AWS S3, MinIO, etc.) for post images."""

from __future__ import annotations

import asyncio
import logging
from typing import BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.application.dtos.asset import UploadedAsset
from app.infrastructure.exceptions import StorageUploadError
from app.infrastructure.external.storage.protocol import (
    build_storage_ref,
    read_checked,
)

logger = logging.getLogger(__name__)


class S3StorageService:
    """S3-compatible storage with server-side encryption.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        max_size: int = 5 * 1024 * 1024,
        allowed_mime_types: str = "image/*",
        client=None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            max_size: Largest accepted image in bytes.
            allowed_mime_types: Comma-separated MIME patterns.
            client: Pre-built boto3 client (tests).
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.max_size = max_size
        self.allowed_mime_types = allowed_mime_types
        if client is None:
            extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                **extra,
            )
        self._client = client

    def _object_url(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def upload(
        self,
        file_data: BinaryIO,
        filename: str,
        content_type: str,
        owner_id: str,
    ) -> UploadedAsset:
        """Put the image in the bucket and return its object URL."""
        body = read_checked(file_data, content_type, self.max_size, self.allowed_mime_types)
        storage_ref = build_storage_ref(owner_id, filename)

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=body,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 upload failed for %s: %s", storage_ref, e)
            raise StorageUploadError(storage_ref, str(e)) from e

        logger.info("Stored image s3://%s/%s (%d bytes)", self.bucket, storage_ref, len(body))
        return UploadedAsset(secure_url=self._object_url(storage_ref), storage_ref=storage_ref)
