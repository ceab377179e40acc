"""Request dependencies (composition root): gateway, services, settings."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from property_media.application.use_cases.media import ProfileImageService
from property_media.core.config import Settings, get_settings
from property_media.infrastructure.external.storage.factory import StorageFactory
from property_media.infrastructure.external.storage.gateway import MediaStorageGateway


def get_app_settings() -> Settings:
    return get_settings()


def get_storage_gateway(request: Request) -> MediaStorageGateway:
    """Return the gateway built at startup; build it on first use if lifespan did not run."""
    gateway = getattr(request.app.state, "storage_gateway", None)
    if gateway is None:
        gateway = StorageFactory.create_gateway()
        request.app.state.storage_gateway = gateway
    return gateway


def get_profile_image_service(
    gateway: Annotated[MediaStorageGateway, Depends(get_storage_gateway)],
) -> ProfileImageService:
    return ProfileImageService(gateway)
