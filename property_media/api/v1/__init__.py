"""API version 1."""

from property_media.api.v1.router import api_router

__all__ = ["api_router"]
