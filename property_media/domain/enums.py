"""Domain enumerations for media assets.

Categories map one-to-one onto top-level storage directories; sub-kinds
and media kinds only apply to social media.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AssetCategory(_ValuesMixin, str, Enum):
    """Asset category; decides the top-level storage directory."""

    PROFILE = "profile"
    PROPERTY = "property"
    SOCIAL_MEDIA = "social-media"

    @property
    def directory(self) -> str:
        """Top-level directory (local) or key prefix (blob) for this category."""
        return _CATEGORY_DIRECTORIES[self]

    @classmethod
    def from_directory(cls, directory: str) -> "AssetCategory | None":
        """Return the category stored under directory, or None."""
        for category, name in _CATEGORY_DIRECTORIES.items():
            if name == directory:
                return category
        return None


_CATEGORY_DIRECTORIES: dict[AssetCategory, str] = {
    AssetCategory.PROFILE: "profile-images",
    AssetCategory.PROPERTY: "property-images",
    AssetCategory.SOCIAL_MEDIA: "instagram-media",
}


class SocialMediaKind(_ValuesMixin, str, Enum):
    """Instagram-style media sub-kind."""

    POST = "post"
    STORY = "story"
    REEL = "reel"


class MediaKind(_ValuesMixin, str, Enum):
    """Whether the asset is a still image or a video."""

    IMAGE = "image"
    VIDEO = "video"
