"""Health check endpoint. Used for liveness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from property_media.api.v1.dependencies import get_storage_gateway
from property_media.infrastructure.external.storage.gateway import MediaStorageGateway
from property_media.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    gateway: Annotated[MediaStorageGateway, Depends(get_storage_gateway)],
) -> HealthResponse:
    """Return ok status and the active storage backend."""
    return HealthResponse(backend=gateway.backend_name)
