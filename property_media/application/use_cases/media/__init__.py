"""Media use cases: profile image upload, replacement, and removal."""

from property_media.application.use_cases.media.profile_images import (
    ProfileImageService,
    UploadedFile,
)

__all__ = [
    "ProfileImageService",
    "UploadedFile",
]
