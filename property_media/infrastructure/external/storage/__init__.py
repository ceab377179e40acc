"""Storage: local filesystem and remote blob backends behind one gateway.

Factory creates the backend from property_media.core.config. Implementations
are loaded lazily inside StorageFactory.create_storage_service() so that the
local backend only requires aiofiles and the blob backend only loads boto3
when used.

Implementations implement StorageProtocol (save, delete).
"""

from property_media.infrastructure.external.storage.factory import StorageFactory
from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "MediaStorageGateway",
    "StorageFactory",
    "StorageProtocol",
]
