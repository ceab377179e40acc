"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and local
static media. No business logic here. See property_media.core.lifespan and
property_media.core.exception_handlers.

Run with: uvicorn --factory property_media.main:create_app

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from property_media.api.v1 import api_router
from property_media.core.config import Settings, get_settings
from property_media.core.exception_handlers import register_exception_handlers
from property_media.core.lifespan import create_lifespan
from property_media.domain.enums import AssetCategory


def _mount_local_media(app: FastAPI, settings: Settings) -> None:
    """Serve the upload root and the category directories as static files.

    Only for the local backend; on managed hosting the blob store serves
    media from its own public URLs.
    """
    root = settings.upload_root_path
    app.mount(
        f"/{root.name}",
        StaticFiles(directory=root, check_dir=False),
        name="uploads",
    )
    for category in (AssetCategory.PROFILE, AssetCategory.SOCIAL_MEDIA):
        app.mount(
            f"/{category.directory}",
            StaticFiles(directory=root / category.directory, check_dir=False),
            name=category.directory,
        )


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    if settings.storage_backend == "local":
        _mount_local_media(app, settings)

    return app
