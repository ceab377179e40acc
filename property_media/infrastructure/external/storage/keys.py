"""Storage key construction.

Key shape: {category_dir}/[{sub_kind}/]{owner_id}/{uuid}{ext}. The same key
is used as the blob object key and as the path under the local upload root.
"""

import os
import uuid

from property_media.domain.enums import AssetCategory
from property_media.domain.value_objects import AssetDescriptor

DEFAULT_IMAGE_EXTENSION = ".jpg"
DEFAULT_VIDEO_EXTENSION = ".mp4"
# Longer suffixes are treated as part of the name, not an extension.
MAX_EXTENSION_LENGTH = 16


def resolve_extension(original_filename: str | None, prefers_video: bool = False) -> str:
    """Return the extension of original_filename, or a default.

    A bare trailing dot, a dotfile name ('.env') or a suffix longer than
    MAX_EXTENSION_LENGTH does not count as an extension.
    """
    default = DEFAULT_VIDEO_EXTENSION if prefers_video else DEFAULT_IMAGE_EXTENSION
    if not original_filename:
        return default
    name = os.path.basename(original_filename.replace("\\", "/")).replace("\x00", "")
    ext = os.path.splitext(name)[1]
    if not ext or ext == "." or len(ext) > MAX_EXTENSION_LENGTH:
        return default
    return ext


def owner_prefix(descriptor: AssetDescriptor) -> str:
    """Directory (or key prefix) holding all assets of one owner in a category."""
    parts = [descriptor.category.directory]
    if descriptor.category is AssetCategory.SOCIAL_MEDIA and descriptor.sub_kind is not None:
        parts.append(descriptor.sub_kind.value)
    parts.append(descriptor.owner_id)
    return "/".join(parts)


def build_storage_key(descriptor: AssetDescriptor) -> str:
    """Build a fresh, globally unique storage key for descriptor."""
    ext = resolve_extension(descriptor.original_filename, descriptor.prefers_video)
    return f"{owner_prefix(descriptor)}/{uuid.uuid4()}{ext}"
