"""Storage backend protocol (DIP). Implementations: LocalStorageService, BlobStorageService."""

from typing import Protocol

from property_media.domain.enums import AssetCategory


class StorageProtocol(Protocol):
    """Protocol for media storage backends (local filesystem, remote blob store)."""

    backend_name: str

    async def save(self, storage_key: str, data: bytes, content_type: str) -> str:
        """Persist data under storage_key. Returns the stored reference.

        The reference is a backend-relative path (local) or an absolute
        URL (blob) and is the only thing needed to delete the asset later.
        """
        ...

    async def delete(self, reference: str, category: AssetCategory) -> bool:
        """Delete the asset behind reference. Returns True if deleted, False if not found.

        category is the expected category, used when the reference does
        not name one itself. Raises StorageDeleteError on transport failure.
        """
        ...
