"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from property_media.domain.enums import AssetCategory, MediaKind, SocialMediaKind
from property_media.domain.exceptions import (
    NoFileProvidedError,
    PropertyMediaException,
    ValidationException,
)
from property_media.domain.value_objects import AssetDescriptor

__all__ = [
    "AssetCategory",
    "AssetDescriptor",
    "MediaKind",
    "NoFileProvidedError",
    "PropertyMediaException",
    "SocialMediaKind",
    "ValidationException",
]
