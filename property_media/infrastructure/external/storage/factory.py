"""Storage service factory: creates the local or blob backend from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from property_media.core.config import Settings

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> StorageProtocol:
        """Create storage service from settings.

        Managed hosting (VERCEL=1) gets the blob backend and never touches
        the local disk; anything else gets the local backend with its
        category directories created.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalStorageService or BlobStorageService.

        Raises:
            ValueError: Blob backend selected without a bucket.
        """
        from property_media.core.config import get_settings

        s = settings or get_settings()

        if s.storage_backend == "blob":
            if not s.blob_bucket:
                raise ValueError("BLOB_BUCKET required for blob backend")
            from property_media.infrastructure.external.storage.blob_storage import (
                BlobStorageService,
            )

            logger.info("Storage initialized. Environment: managed hosting (blob store)")
            return BlobStorageService(
                bucket=s.blob_bucket,
                region=s.blob_region,
                endpoint_url=s.blob_endpoint_url,
                access_key=s.blob_access_key,
                secret_key=(
                    s.blob_secret_key.get_secret_value() if s.blob_secret_key else None
                ),
                public_base_url=s.blob_public_base_url,
            )

        from property_media.infrastructure.external.storage.local_storage import (
            LocalStorageService,
        )

        logger.info("Storage initialized. Environment: local (%s)", s.upload_root_path)
        return LocalStorageService(upload_root=s.upload_root_path)

    @staticmethod
    def create_gateway(settings: "Settings | None" = None) -> MediaStorageGateway:
        """Create the media storage gateway over the configured backend."""
        return MediaStorageGateway(StorageFactory.create_storage_service(settings))
