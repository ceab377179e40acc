"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The deployment flag (VERCEL) and blob store settings
are validated at load time.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. When running on managed
    hosting (VERCEL=1) the blob store bucket is required, since there is
    no writable local disk to fall back to.
    """

    # App
    app_name: str = "property-media"
    app_version: str = "1.0.0"
    debug: bool = False

    # Deployment: VERCEL=1 means managed hosting (remote blob backend)
    vercel: bool = False

    # Public base URL for locally served media
    base_url: str = "http://localhost:3000"

    # CORS
    allowed_origins: str = "*"

    # Local storage
    upload_root: str = "uploads"
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # Remote blob store (S3-compatible)
    blob_bucket: str | None = None
    blob_region: str = "us-east-1"
    blob_endpoint_url: str | None = None
    blob_access_key: str | None = None
    blob_secret_key: SecretStr | None = None
    # e.g. https://<store>.public.blob.vercel-storage.com; derived from bucket when unset
    blob_public_base_url: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_storage(self) -> "Settings":
        """Validate blob store settings when the remote backend is selected."""
        if self.vercel and not self.blob_bucket:
            raise ValueError(
                "BLOB_BUCKET is required when VERCEL=1 (remote blob backend). "
                "Set in environment or .env file."
            )
        if self.max_upload_size <= 0:
            raise ValueError("MAX_UPLOAD_SIZE must be a positive number of bytes")
        return self

    @property
    def storage_backend(self) -> str:
        """Name of the active storage backend: 'blob' on managed hosting, else 'local'."""
        return "blob" if self.vercel else "local"

    @property
    def upload_root_path(self) -> Path:
        """Upload root resolved against the current working directory."""
        return Path(self.upload_root).resolve()


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
