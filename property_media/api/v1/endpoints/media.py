"""Media API: thin routes delegating to MediaStorageGateway and ProfileImageService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from property_media.api.v1.dependencies import (
    get_app_settings,
    get_profile_image_service,
    get_storage_gateway,
)
from property_media.application.use_cases.media import ProfileImageService, UploadedFile
from property_media.core.config import Settings
from property_media.domain.enums import AssetCategory, MediaKind, SocialMediaKind
from property_media.domain.exceptions import ValidationException
from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.schemas.media import MediaDeleteResponse, MediaUploadResponse

router = APIRouter()


async def _read_upload(file: UploadFile, max_bytes: int) -> UploadedFile:
    """Read the multipart file, rejecting anything over max_bytes with 413."""
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File must be at most {max_bytes} bytes",
        )
    return UploadedFile(
        data=data,
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
    )


def _upload_response(
    reference: str, gateway: MediaStorageGateway, settings: Settings
) -> MediaUploadResponse:
    """Blob references are already public URLs; local ones are served under the upload root."""
    if reference.startswith(("http://", "https://")):
        url = reference
    else:
        url = f"{settings.base_url.rstrip('/')}/{settings.upload_root_path.name}/{reference}"
    return MediaUploadResponse(reference=reference, backend=gateway.backend_name, url=url)


@router.post(
    "/profile-images/{user_id}",
    response_model=MediaUploadResponse,
    status_code=201,
)
async def upload_profile_image(
    user_id: str,
    settings: Annotated[Settings, Depends(get_app_settings)],
    profile_svc: Annotated[ProfileImageService, Depends(get_profile_image_service)],
    file: UploadFile = File(...),
):
    """Upload a profile image for a user."""
    upload = await _read_upload(file, settings.max_upload_size)
    try:
        reference = await profile_svc.upload(user_id, upload)
    except ValueError as e:
        raise ValidationException(str(e)) from e
    return _upload_response(reference, profile_svc.gateway, settings)


@router.put(
    "/profile-images/{user_id}",
    response_model=MediaUploadResponse,
)
async def replace_profile_image(
    user_id: str,
    settings: Annotated[Settings, Depends(get_app_settings)],
    profile_svc: Annotated[ProfileImageService, Depends(get_profile_image_service)],
    file: UploadFile = File(...),
    current_reference: str | None = Form(None),
):
    """Replace a user's profile image; the old one is removed best-effort."""
    upload = await _read_upload(file, settings.max_upload_size)
    try:
        reference = await profile_svc.replace(user_id, upload, current_reference)
    except ValueError as e:
        raise ValidationException(str(e)) from e
    return _upload_response(reference, profile_svc.gateway, settings)


@router.post(
    "/property-images/{property_id}",
    response_model=MediaUploadResponse,
    status_code=201,
)
async def upload_property_image(
    property_id: str,
    settings: Annotated[Settings, Depends(get_app_settings)],
    gateway: Annotated[MediaStorageGateway, Depends(get_storage_gateway)],
    file: UploadFile = File(...),
    sub_kind: SocialMediaKind | None = Form(None),
):
    """Upload an image (or reel) for a property."""
    upload = await _read_upload(file, settings.max_upload_size)
    try:
        reference = await gateway.save_property_image(
            upload.data,
            property_id,
            original_filename=upload.filename,
            content_type=upload.content_type,
            sub_kind=sub_kind,
        )
    except ValueError as e:
        raise ValidationException(str(e)) from e
    return _upload_response(reference, gateway, settings)


@router.post(
    "/social/{sub_kind}/{owner_id}",
    response_model=MediaUploadResponse,
    status_code=201,
)
async def upload_social_media(
    sub_kind: SocialMediaKind,
    owner_id: str,
    settings: Annotated[Settings, Depends(get_app_settings)],
    gateway: Annotated[MediaStorageGateway, Depends(get_storage_gateway)],
    file: UploadFile = File(...),
    media_kind: MediaKind = Form(MediaKind.IMAGE),
):
    """Upload a post, story, or reel (image or video)."""
    upload = await _read_upload(file, settings.max_upload_size)
    try:
        reference = await gateway.save_social_media(
            upload.data,
            owner_id,
            sub_kind=sub_kind,
            media_kind=media_kind,
            original_filename=upload.filename,
            content_type=upload.content_type,
        )
    except ValueError as e:
        raise ValidationException(str(e)) from e
    return _upload_response(reference, gateway, settings)


@router.delete("", response_model=MediaDeleteResponse)
async def delete_media(
    gateway: Annotated[MediaStorageGateway, Depends(get_storage_gateway)],
    reference: str = Query(..., description="Reference returned by an upload"),
    category: AssetCategory = Query(
        AssetCategory.PROPERTY,
        description="Expected category when the reference does not name one",
    ),
):
    """Delete a stored asset. Returns deleted=false when it was already gone."""
    deleted = await gateway.delete(reference, category)
    return MediaDeleteResponse(deleted=deleted)


@router.delete("/profile-images", response_model=MediaDeleteResponse)
async def delete_profile_image(
    profile_svc: Annotated[ProfileImageService, Depends(get_profile_image_service)],
    reference: str = Query(..., description="Reference returned by a profile image upload"),
):
    """Remove a profile image. Bare filenames are looked up under profile-images."""
    deleted = await profile_svc.remove(reference)
    return MediaDeleteResponse(deleted=deleted)
