"""Infrastructure exceptions for storage operations.

Storage errors extend PropertyMediaException so presentation can map them
to HTTP responses consistently.
"""

from property_media.domain.exceptions import PropertyMediaException


class StorageException(PropertyMediaException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """Upload to the remote blob store failed."""

    def __init__(self, storage_key: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {storage_key}",
            "STORAGE_UPLOAD_ERROR",
            {"storage_key": storage_key, "reason": reason},
        )


class StorageWriteError(StorageException):
    """Write to the local filesystem failed."""

    def __init__(self, storage_key: str, reason: str) -> None:
        super().__init__(
            f"Failed to write file: {storage_key}",
            "STORAGE_WRITE_ERROR",
            {"storage_key": storage_key, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Deletion failed for a reason other than the asset being absent."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {reference}",
            "STORAGE_DELETE_ERROR",
            {"reference": reference, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path resolves outside the storage root."""

    def __init__(self, path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {path}",
            "STORAGE_PERMISSION_ERROR",
            {"path": path, "operation": operation},
        )
