"""Unit tests for LocalStorageService (save, reference normalization, delete fallback)."""

import asyncio
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import aiofiles.os
import pytest

from property_media.domain.enums import AssetCategory
from property_media.infrastructure.exceptions import (
    StorageDeleteError,
    StoragePermissionError,
    StorageWriteError,
)
from property_media.infrastructure.external.storage.local_storage import (
    LocalStorageService,
)

KEY = "profile-images/u1/3f2b8c1e-0000-4000-8000-000000000001.jpg"


def test_init_creates_category_directories(upload_root: Path) -> None:
    LocalStorageService(upload_root)
    for name in ("profile-images", "property-images", "instagram-media"):
        assert (upload_root / name).is_dir()


def test_init_is_idempotent(upload_root: Path) -> None:
    LocalStorageService(upload_root)
    (upload_root / "profile-images" / "keep.txt").write_text("x")
    LocalStorageService(upload_root)
    assert (upload_root / "profile-images" / "keep.txt").exists()


async def test_save_writes_file_and_returns_relative_key(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    data = b"\xff\xd8" + b"a" * (200 * 1024)  # spans several chunks
    reference = await local_storage.save(KEY, data, "image/jpeg")
    assert reference == KEY
    assert (upload_root / KEY).read_bytes() == data
    leftovers = [p.name for p in (upload_root / "profile-images" / "u1").iterdir()]
    assert leftovers == [Path(KEY).name]


async def test_save_rejects_key_outside_root(local_storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await local_storage.save("../escape.jpg", b"x", "image/jpeg")


async def test_save_wraps_filesystem_errors(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    # A file where the owner directory should be makes the write impossible.
    (upload_root / "profile-images" / "u1").write_bytes(b"not a dir")
    with pytest.raises(StorageWriteError) as exc_info:
        await local_storage.save(KEY, b"x", "image/jpeg")
    assert exc_info.value.error_code == "STORAGE_WRITE_ERROR"
    assert isinstance(exc_info.value.__cause__, OSError)


_REFERENCE_SHAPES: dict[str, Callable[[str], str]] = {
    "bare": lambda key: key,
    "leading_slash": lambda key: f"/{key}",
    "rooted": lambda key: f"uploads/{key}",
    "rooted_leading_slash": lambda key: f"/uploads/{key}",
    "local_url": lambda key: f"http://localhost:3000/uploads/{key}",
    "static_url": lambda key: f"http://localhost:3000/{key}",
}


@pytest.mark.parametrize("shape", sorted(_REFERENCE_SHAPES))
async def test_delete_accepts_every_reference_shape(
    local_storage: LocalStorageService, upload_root: Path, shape: str
) -> None:
    await local_storage.save(KEY, b"img", "image/jpeg")
    reference = _REFERENCE_SHAPES[shape](KEY)
    assert await local_storage.delete(reference, AssetCategory.PROFILE) is True
    assert not (upload_root / KEY).exists()


async def test_delete_category_inferred_from_first_segment(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    key = "instagram-media/post/u1/a.jpg"
    await local_storage.save(key, b"img", "image/jpeg")
    # Expected category is wrong; the path itself names the right one.
    assert await local_storage.delete(key, AssetCategory.PROFILE) is True
    assert not (upload_root / key).exists()


async def test_delete_bare_filename_uses_expected_category(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    legacy = upload_root / "property-images" / "legacy.jpg"
    legacy.write_bytes(b"img")
    assert await local_storage.delete("legacy.jpg", AssetCategory.PROPERTY) is True
    assert not legacy.exists()


async def test_delete_falls_back_to_basename_in_category(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    flat = upload_root / "property-images" / "moved.jpg"
    flat.write_bytes(b"img")
    assert await local_storage.delete("old/layout/moved.jpg", AssetCategory.PROPERTY) is True
    assert not flat.exists()


async def test_delete_missing_returns_false(local_storage: LocalStorageService) -> None:
    assert await local_storage.delete(KEY, AssetCategory.PROFILE) is False


async def test_delete_twice_returns_false_second_time(
    local_storage: LocalStorageService,
) -> None:
    await local_storage.save(KEY, b"img", "image/jpeg")
    assert await local_storage.delete(KEY, AssetCategory.PROFILE) is True
    assert await local_storage.delete(KEY, AssetCategory.PROFILE) is False


async def test_delete_never_touches_files_outside_root(
    local_storage: LocalStorageService, tmp_path: Path
) -> None:
    secret = tmp_path / "secret.txt"
    secret.write_text("keep")
    assert await local_storage.delete("../secret.txt", AssetCategory.PROPERTY) is False
    assert await local_storage.delete("secret.txt", AssetCategory.PROPERTY) is False
    assert secret.exists()


async def test_delete_ignores_directories(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    assert await local_storage.delete("profile-images", AssetCategory.PROFILE) is False
    assert (upload_root / "profile-images").is_dir()


async def test_delete_wraps_os_errors(
    local_storage: LocalStorageService, monkeypatch: pytest.MonkeyPatch
) -> None:
    await local_storage.save(KEY, b"img", "image/jpeg")
    monkeypatch.setattr(aiofiles.os, "remove", AsyncMock(side_effect=PermissionError("denied")))
    with pytest.raises(StorageDeleteError):
        await local_storage.delete(KEY, AssetCategory.PROFILE)


@pytest.mark.parametrize(
    "reference",
    ["profile-images/u1/a\x00.jpg", "a\x00b.jpg", "http://localhost:3000/uploads/%00.jpg"],
)
async def test_delete_unresolvable_reference_finds_nothing(
    local_storage: LocalStorageService, reference: str
) -> None:
    assert list(local_storage.candidate_paths(reference, AssetCategory.PROFILE)) == []
    assert await local_storage.delete(reference, AssetCategory.PROFILE) is False


async def test_save_rejects_unresolvable_key(local_storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await local_storage.save("profile-images/u1/a\x00.jpg", b"x", "image/jpeg")


def test_candidate_paths_order_and_dedup(local_storage: LocalStorageService) -> None:
    root = local_storage.storage_root
    candidates = list(
        local_storage.candidate_paths("profile-images/u1/a.jpg", AssetCategory.PROFILE)
    )
    # Root-qualified duplicates the normalized path; the literal path lies outside the root.
    assert candidates == [
        root / "profile-images" / "u1" / "a.jpg",
        root / "profile-images" / "a.jpg",
    ]


def test_candidate_paths_empty_reference(local_storage: LocalStorageService) -> None:
    assert list(local_storage.candidate_paths("/", AssetCategory.PROFILE)) == []


async def test_concurrent_saves_do_not_collide(
    local_storage: LocalStorageService, upload_root: Path
) -> None:
    keys = [f"property-images/p1/{i}.jpg" for i in range(20)]
    results = await asyncio.gather(
        *(local_storage.save(k, f"img-{k}".encode(), "image/jpeg") for k in keys)
    )
    assert results == keys
    for k in keys:
        assert (upload_root / k).read_bytes() == f"img-{k}".encode()
