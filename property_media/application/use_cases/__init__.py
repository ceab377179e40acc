"""Application use cases: one entry point per workflow."""

from property_media.application.use_cases.media import ProfileImageService, UploadedFile

__all__ = [
    "ProfileImageService",
    "UploadedFile",
]
