"""Domain value objects for media assets.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from property_media.domain.enums import AssetCategory, MediaKind, SocialMediaKind


def _validate_owner_id(owner_id: str) -> None:
    """Owner ids become a path segment; reject anything that could escape it."""
    if not owner_id or not owner_id.strip():
        raise ValueError("Owner id must be a non-empty string")
    if "/" in owner_id or "\\" in owner_id or owner_id in (".", ".."):
        raise ValueError(f"Owner id must be a single path segment: {owner_id!r}")
    if "\x00" in owner_id:
        raise ValueError("Owner id must not contain null bytes")


@dataclass(frozen=True)
class AssetDescriptor:
    """Everything needed to store one asset.

    data may be empty here; the gateway rejects empty buffers with
    NoFileProvidedError so callers get a consistent error code.
    """

    data: bytes
    owner_id: str
    category: AssetCategory
    content_type: str = "application/octet-stream"
    original_filename: str | None = None
    sub_kind: SocialMediaKind | None = None
    media_kind: MediaKind = MediaKind.IMAGE

    def __post_init__(self) -> None:
        _validate_owner_id(self.owner_id)
        if self.category is AssetCategory.SOCIAL_MEDIA and self.sub_kind is None:
            raise ValueError(
                "Social media assets require a sub-kind "
                f"({', '.join(SocialMediaKind.values())})"
            )

    @property
    def size(self) -> int:
        return len(self.data) if self.data else 0

    @property
    def prefers_video(self) -> bool:
        """True when the default extension should be a video one.

        Social media declares its media kind explicitly; property uploads
        only carry a sub-kind, where a reel implies video.
        """
        if self.media_kind is MediaKind.VIDEO:
            return True
        if self.category is AssetCategory.SOCIAL_MEDIA:
            return False
        return self.sub_kind is SocialMediaKind.REEL
