"""Unit tests for post image storage (local filesystem and S3 backends)."""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from app.core.config import Settings
from app.domain.exceptions import ValidationException
from app.infrastructure.exceptions import StoragePermissionError, StorageUploadError
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalStorageService
from app.infrastructure.external.storage.protocol import build_storage_ref, read_checked
from app.infrastructure.external.storage.s3_storage import S3StorageService

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestReadChecked:
    def test_accepts_image(self) -> None:
        assert read_checked(BytesIO(PNG), "image/png", 1024, "image/*") == PNG

    def test_rejects_other_types(self) -> None:
        with pytest.raises(ValidationException, match="Unsupported file type"):
            read_checked(BytesIO(b"%PDF"), "application/pdf", 1024, "image/*")

    def test_rejects_oversize(self) -> None:
        with pytest.raises(ValidationException, match="maximum size"):
            read_checked(BytesIO(b"x" * 11), "image/png", 10, "image/*")

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValidationException, match="empty"):
            read_checked(BytesIO(b""), "image/png", 10, "image/*")

    def test_multiple_patterns(self) -> None:
        assert read_checked(BytesIO(b"x"), "image/gif", 10, "image/png, image/gif") == b"x"


def test_storage_ref_keeps_only_extension() -> None:
    ref = build_storage_ref("alice", "../../etc/My Photo.JPG")
    assert ref.startswith("posts/alice/")
    assert ref.endswith(".jpg")
    assert ".." not in ref


class TestLocalStorage:
    async def test_writes_file_and_returns_url(self, tmp_path) -> None:
        svc = LocalStorageService(str(tmp_path), "https://files.test/uploads/")
        asset = await svc.upload(BytesIO(PNG), "cat.png", "image/png", owner_id="alice")

        assert asset.secure_url == f"https://files.test/uploads/{asset.storage_ref}"
        assert (tmp_path / asset.storage_ref).read_bytes() == PNG
        leftovers = [p.name for p in (tmp_path / "posts" / "alice").iterdir() if p.name.startswith(".tmp_")]
        assert leftovers == []

    async def test_owner_cannot_escape_root(self, tmp_path) -> None:
        svc = LocalStorageService(str(tmp_path / "root"), "https://files.test")
        with pytest.raises(StoragePermissionError):
            await svc.upload(BytesIO(PNG), "cat.png", "image/png", owner_id="../../outside")

    async def test_rejects_non_image(self, tmp_path) -> None:
        svc = LocalStorageService(str(tmp_path), "https://files.test")
        with pytest.raises(ValidationException):
            await svc.upload(BytesIO(b"hello"), "a.txt", "text/plain", owner_id="alice")


class TestS3Storage:
    async def test_puts_object_and_returns_object_url(self) -> None:
        client = MagicMock()
        svc = S3StorageService(bucket="media", region="eu-west-1", client=client)

        asset = await svc.upload(BytesIO(PNG), "cat.png", "image/png", owner_id="alice")

        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "media"
        assert kwargs["Key"] == asset.storage_ref
        assert kwargs["Body"] == PNG
        assert kwargs["ContentType"] == "image/png"
        assert asset.secure_url == f"https://media.s3.eu-west-1.amazonaws.com/{asset.storage_ref}"

    async def test_custom_endpoint_url(self) -> None:
        svc = S3StorageService(bucket="media", endpoint_url="http://minio:9000/", client=MagicMock())
        asset = await svc.upload(BytesIO(PNG), "cat.png", "image/png", owner_id="alice")
        assert asset.secure_url == f"http://minio:9000/media/{asset.storage_ref}"

    async def test_client_error_becomes_upload_error(self) -> None:
        client = MagicMock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
        )
        svc = S3StorageService(bucket="media", client=client)
        with pytest.raises(StorageUploadError) as exc_info:
            await svc.upload(BytesIO(PNG), "cat.png", "image/png", owner_id="alice")
        assert "Access Denied" in exc_info.value.message
        assert exc_info.value.error_code == "STORAGE_UPLOAD_ERROR"


def test_factory_builds_local_backend(tmp_path) -> None:
    settings = Settings(
        secret_key="s",
        storage_backend="local",
        storage_root=str(tmp_path),
        max_upload_size=123,
    )
    svc = StorageFactory.create_storage_service(settings)
    assert isinstance(svc, LocalStorageService)
    assert svc.max_size == 123


def test_settings_require_bucket_for_s3() -> None:
    with pytest.raises(ValueError, match="s3_bucket"):
        Settings(secret_key="s", storage_backend="s3", s3_bucket=None)
