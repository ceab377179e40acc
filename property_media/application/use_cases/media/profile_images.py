"""Profile image operations: upload, replace, and remove."""

from __future__ import annotations

from dataclasses import dataclass

from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    """File already extracted from a multipart request by the HTTP layer."""

    data: bytes
    filename: str | None = None
    content_type: str = "application/octet-stream"


class ProfileImageService:
    """Single responsibility: keep a user's profile image reference current in storage."""

    def __init__(self, gateway: MediaStorageGateway) -> None:
        self.gateway = gateway

    async def upload(self, user_id: str, upload: UploadedFile) -> str:
        """Store a new profile image. Returns its reference."""
        return await self.gateway.save_profile_image(
            upload.data,
            user_id,
            original_filename=upload.filename,
            content_type=upload.content_type,
        )

    async def replace(
        self,
        user_id: str,
        upload: UploadedFile,
        current_reference: str | None = None,
    ) -> str:
        """Store the new image, then drop the old one on a best-effort basis.

        The new image is saved first, so a failed save leaves the current
        image untouched. A failed delete of the old image is only logged;
        the replacement still succeeds.
        """
        new_reference = await self.upload(user_id, upload)
        if current_reference and current_reference != new_reference:
            deleted = await self.gateway.delete_profile_image(current_reference)
            if not deleted:
                logger.warning(
                    "Old profile image for user %s was not removed: %s",
                    user_id,
                    current_reference,
                )
        return new_reference

    async def remove(self, reference: str | None) -> bool:
        return await self.gateway.delete_profile_image(reference)
