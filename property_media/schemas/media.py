"""Media API schemas."""

from pydantic import BaseModel, Field


class MediaUploadResponse(BaseModel):
    """Response for media uploads. reference is opaque; store it and pass it back to delete."""

    reference: str = Field(..., description="Stored reference (relative path or absolute URL)")
    backend: str
    url: str = Field(..., description="Public URL the asset is served from")


class MediaDeleteResponse(BaseModel):
    """Response for DELETE /media. deleted is False when nothing was found."""

    deleted: bool
