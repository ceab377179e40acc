"""Local filesystem storage with path validation, atomic writes, and tolerant deletes."""

from __future__ import annotations

import logging
import os
import posixpath
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from urllib.parse import unquote, urlparse

import aiofiles
import aiofiles.os

from property_media.domain.enums import AssetCategory
from property_media.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)


class LocalStorageService:
    """Local filesystem storage rooted at a single upload directory.

    Saved references are category-relative paths such as
    'profile-images/u1/<uuid>.jpg'. Deletes also accept the shapes older
    code produced (leading slash, 'uploads/'-rooted path, full local URL)
    and fall back through an ordered list of candidate paths. Every
    candidate must resolve inside the upload root.
    """

    backend_name = "local"

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, upload_root: str | Path) -> None:
        """Initialize local storage and create the category directories.

        Args:
            upload_root: Root upload directory (e.g. './uploads'). Its last
                path component is the root prefix references may carry.
        """
        self.storage_root = Path(upload_root).resolve()
        self.base_dir = self.storage_root.parent
        self.root_prefix = self.storage_root.name
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)
        for category in AssetCategory:
            (self.storage_root / category.directory).mkdir(
                parents=True, exist_ok=True, mode=0o750
            )
        logger.debug("Local upload directories ready under %s", self.storage_root)
        # Delete fallback order; each maps (stripped reference, category) to a path.
        self._candidate_generators: tuple[Callable[[str, AssetCategory], Path], ...] = (
            self._normalized_path,
            self._root_qualified_path,
            self._literal_path,
            self._basename_path,
        )

    def _within_root(self, path: Path) -> Path | None:
        """Resolve path; None if it escapes storage_root, is the root itself, or cannot resolve."""
        try:
            resolved = path.resolve()
            resolved.relative_to(self.storage_root)
        except (ValueError, OSError, RuntimeError):
            # Embedded null bytes, symlink loops, names the OS rejects.
            return None
        if resolved == self.storage_root:
            return None
        return resolved

    def _get_full_path(self, storage_key: str) -> Path:
        """Resolve and validate a key under storage_root. Raises StoragePermissionError if traversal."""
        full_path = self._within_root(self.storage_root / storage_key)
        if full_path is None:
            raise StoragePermissionError(storage_key, "write")
        return full_path

    async def save(self, storage_key: str, data: bytes, content_type: str) -> str:
        """Stream data to storage_root/storage_key via temp file + rename. Returns storage_key."""
        target_path = self._get_full_path(storage_key)
        try:
            await aiofiles.os.makedirs(target_path.parent, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    for offset in range(0, len(data), self.CHUNK_SIZE):
                        await f.write(data[offset : offset + self.CHUNK_SIZE])
                await aiofiles.os.replace(temp_path, target_path)
            finally:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageWriteError(storage_key, str(e)) from e
        logger.info(
            "Saved %s (%s, %.2f KB) to local filesystem",
            target_path,
            content_type,
            len(data) / 1024,
        )
        return storage_key

    @staticmethod
    def _strip_reference(reference: str) -> str:
        """URL → its path component, then drop a single leading '/'."""
        path = reference.strip()
        if path.startswith(("http://", "https://")):
            path = unquote(urlparse(path).path)
            logger.debug("Converted URL to path: %s", path)
        if path.startswith("/"):
            path = path[1:]
        return path

    def _normalize(self, stripped: str, category: AssetCategory) -> str:
        """Prefix with the root and, when missing, a category directory."""
        if stripped.startswith(f"{self.root_prefix}/"):
            return stripped
        first_segment = stripped.split("/", 1)[0]
        if AssetCategory.from_directory(first_segment) is not None:
            return f"{self.root_prefix}/{stripped}"
        return f"{self.root_prefix}/{category.directory}/{stripped}"

    def _normalized_path(self, stripped: str, category: AssetCategory) -> Path:
        return self.base_dir / self._normalize(stripped, category)

    def _root_qualified_path(self, stripped: str, category: AssetCategory) -> Path:
        return self.storage_root / stripped

    def _literal_path(self, stripped: str, category: AssetCategory) -> Path:
        return self.base_dir / stripped

    def _basename_path(self, stripped: str, category: AssetCategory) -> Path:
        return self.storage_root / category.directory / posixpath.basename(stripped)

    def candidate_paths(self, reference: str, category: AssetCategory) -> Iterator[Path]:
        """Yield distinct candidate paths for reference, in fallback order, lazily."""
        stripped = self._strip_reference(reference)
        if not stripped:
            return
        seen: set[Path] = set()
        for generate in self._candidate_generators:
            candidate = self._within_root(generate(stripped, category))
            if candidate is None or candidate in seen:
                continue
            seen.add(candidate)
            yield candidate

    async def delete(self, reference: str, category: AssetCategory) -> bool:
        """Delete the first existing candidate for reference. Returns False if none exist."""
        for path in self.candidate_paths(reference, category):
            try:
                if not path.is_file():
                    logger.debug("No file at candidate path %s", path)
                    continue
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                # Removed concurrently; treat as absent and keep looking.
                continue
            except OSError as e:
                raise StorageDeleteError(reference, str(e)) from e
            logger.info("Deleted local file %s", path)
            return True
        logger.warning("File not found for %s after trying all candidate paths", reference)
        return False
