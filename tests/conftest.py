"""Pytest configuration and fixtures for property_media.

Every test runs from its own tmp_path with a fresh settings cache, so the
local backend writes under tmp_path/uploads and no .env file leaks in.
The blob backend is exercised against a MagicMock boto3 client.
"""

from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from property_media.core.config import get_settings
from property_media.infrastructure.external.storage.blob_storage import BlobStorageService
from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.infrastructure.external.storage.local_storage import (
    LocalStorageService,
)
from property_media.main import create_app

BLOB_PUBLIC_BASE = "https://store123.public.blob.vercel-storage.com"


def client_error(code: str, operation: str = "HeadObject") -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Run from tmp_path with local-backend env and a cleared settings cache."""
    monkeypatch.chdir(tmp_path)
    for name in ("VERCEL", "BLOB_BUCKET", "BLOB_PUBLIC_BASE_URL", "MAX_UPLOAD_SIZE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("UPLOAD_ROOT", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    return (tmp_path / "uploads").resolve()


@pytest.fixture
def local_storage(upload_root: Path) -> LocalStorageService:
    return LocalStorageService(upload_root)


@pytest.fixture
def gateway(local_storage: LocalStorageService) -> MediaStorageGateway:
    return MediaStorageGateway(local_storage)


@pytest.fixture
def s3_client() -> MagicMock:
    """boto3 S3 client double: every object exists unless a test says otherwise."""
    client = MagicMock()
    client.head_object.return_value = {"ContentLength": 1}
    client.delete_object.return_value = {}
    client.put_object.return_value = {"ETag": '"abc"'}
    return client


@pytest.fixture
def blob_storage(s3_client: MagicMock) -> BlobStorageService:
    return BlobStorageService(
        bucket="media",
        public_base_url=BLOB_PUBLIC_BASE,
        client=s3_client,
    )


@pytest.fixture
def blob_gateway(blob_storage: BlobStorageService) -> MediaStorageGateway:
    return MediaStorageGateway(blob_storage)


@pytest.fixture
def app(gateway: MediaStorageGateway) -> FastAPI:
    """App wired to the tmp_path local gateway (lifespan does not run under ASGITransport)."""
    application = create_app()
    application.state.storage_gateway = gateway
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
