"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_storage (secret_key, and the S3 bucket when the
    s3 storage backend is selected).
    """

    # App
    app_name: str = "postline"
    app_version: str = "1.0.0"
    debug: bool = False

    # Security (tokens are issued elsewhere; we only verify them)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Asset storage for post images
    storage_backend: str = "local"
    storage_root: str = "/var/postline/uploads"
    storage_base_url: str = "http://localhost:8000/uploads"
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None
    max_upload_size: int = 5 * 1024 * 1024  # 5MB
    allowed_mime_types: str = "image/*"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_posts: int = 43200  # 12 hours
    cache_ttl_user_posts: int = 3600
    # False: writes drop posts:all instead of patching it (next read repopulates).
    posts_cache_patch_on_write: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env and storage backend."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend == "s3":
            if not self.s3_bucket:
                raise ValueError(
                    "s3_bucket is required when storage_backend is 's3'. "
                    "Set S3_BUCKET environment variable or update .env file."
                )
        elif self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if self.cache_ttl_posts <= 0 or self.cache_ttl_user_posts <= 0:
            raise ValueError("Cache TTLs must be positive (seconds)")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
