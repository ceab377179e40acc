"""Media storage gateway: one save/delete contract over whichever backend is active.

Callers hand over bytes plus metadata and get back an opaque reference;
only the gateway (through its backend) interprets references. Save
failures propagate. Delete failures are logged and reported as False, so
best-effort cleanup never blocks the caller's own update.
"""

from __future__ import annotations

from property_media.domain.enums import AssetCategory, MediaKind, SocialMediaKind
from property_media.domain.exceptions import NoFileProvidedError
from property_media.domain.value_objects import AssetDescriptor
from property_media.infrastructure.exceptions import StorageException
from property_media.infrastructure.external.storage.keys import build_storage_key
from property_media.infrastructure.external.storage.protocol import StorageProtocol
from property_media.shared.telemetry.logging import get_logger, log_duration

logger = get_logger(__name__)


class MediaStorageGateway:
    """Single point of truth for where media bytes live.

    The backend is chosen once (see StorageFactory) and injected here.
    """

    def __init__(self, storage: StorageProtocol) -> None:
        self.storage = storage

    @property
    def backend_name(self) -> str:
        return self.storage.backend_name

    async def save(self, descriptor: AssetDescriptor) -> str:
        """Store descriptor's bytes under a fresh unique key. Returns the stored reference.

        Raises:
            NoFileProvidedError: Buffer is empty or missing.
            StorageUploadError: Blob upload failed.
            StorageWriteError: Local write failed.
        """
        if not descriptor.data:
            logger.error(
                "No file provided for %s owner %s",
                descriptor.category.value,
                descriptor.owner_id,
            )
            raise NoFileProvidedError(descriptor.owner_id, descriptor.category.value)

        storage_key = build_storage_key(descriptor)
        logger.info(
            "Saving %s asset for owner %s (%.2f KB, %s, %s)",
            descriptor.category.value,
            descriptor.owner_id,
            descriptor.size / 1024,
            descriptor.content_type,
            descriptor.original_filename or "unknown",
        )
        with log_duration(
            logger,
            "save",
            backend=self.backend_name,
            key=storage_key,
            size=descriptor.size,
        ):
            return await self.storage.save(
                storage_key, descriptor.data, descriptor.content_type
            )

    async def delete(self, reference: str | None, category: AssetCategory) -> bool:
        """Delete the asset behind reference. True if deleted, False if absent or on failure."""
        if not reference or not reference.strip():
            logger.warning("Received empty reference for %s deletion", category.value)
            return False
        logger.info("Attempting to delete %s asset: %s", category.value, reference)
        try:
            with log_duration(
                logger, "delete", backend=self.backend_name, reference=reference
            ):
                return await self.storage.delete(reference, category)
        except StorageException as e:
            logger.error("Failed to delete %s: %s (%s)", reference, e.message, e.details)
            return False

    async def save_profile_image(
        self,
        data: bytes | None,
        user_id: str,
        original_filename: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Save a user's profile image under profile-images/{user_id}/."""
        return await self.save(
            AssetDescriptor(
                data=data or b"",
                owner_id=user_id,
                category=AssetCategory.PROFILE,
                content_type=content_type,
                original_filename=original_filename,
            )
        )

    async def delete_profile_image(self, reference: str | None) -> bool:
        return await self.delete(reference, AssetCategory.PROFILE)

    async def save_property_image(
        self,
        data: bytes | None,
        property_id: str,
        original_filename: str | None = None,
        content_type: str = "application/octet-stream",
        sub_kind: SocialMediaKind | None = None,
    ) -> str:
        """Save a property image under property-images/{property_id}/.

        sub_kind only affects the default extension (a reel defaults to .mp4).
        """
        return await self.save(
            AssetDescriptor(
                data=data or b"",
                owner_id=property_id,
                category=AssetCategory.PROPERTY,
                content_type=content_type,
                original_filename=original_filename,
                sub_kind=sub_kind,
            )
        )

    async def delete_property_image(self, reference: str | None) -> bool:
        return await self.delete(reference, AssetCategory.PROPERTY)

    async def save_social_media(
        self,
        data: bytes | None,
        owner_id: str,
        sub_kind: SocialMediaKind,
        media_kind: MediaKind = MediaKind.IMAGE,
        original_filename: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Save a post, story, or reel under instagram-media/{sub_kind}/{owner_id}/."""
        return await self.save(
            AssetDescriptor(
                data=data or b"",
                owner_id=owner_id,
                category=AssetCategory.SOCIAL_MEDIA,
                content_type=content_type,
                original_filename=original_filename,
                sub_kind=sub_kind,
                media_kind=media_kind,
            )
        )

    async def delete_social_media(self, reference: str | None) -> bool:
        return await self.delete(reference, AssetCategory.SOCIAL_MEDIA)
