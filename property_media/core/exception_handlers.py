"""HTTP error responses for the media API.

Caller mistakes (no file, bad owner id) become 4xx with their error code;
storage backend failures become 5xx and are logged with the storage key or
reference from the exception details. Delete never reaches here: the
gateway reports delete failures as deleted=false.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from property_media.core.config import get_settings
from property_media.domain.exceptions import PropertyMediaException

logger = logging.getLogger(__name__)

# error_code -> HTTP status; blob upload failures are 502, local disk failures 500
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "NO_FILE_PROVIDED": 400,
    "STORAGE_PERMISSION_ERROR": 403,
    "STORAGE_UPLOAD_ERROR": 502,
    "STORAGE_WRITE_ERROR": 500,
    "STORAGE_DELETE_ERROR": 500,
}


def _property_media_exception_handler(
    request: Request, exc: PropertyMediaException
) -> JSONResponse:
    """Serialize a media or storage error; unknown error codes default to 400."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.details)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Unknown sub-kind, media kind or category in path, form or query: 422."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """413 for oversized uploads, 404s from the static media mounts, and the like."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is a 500; the message is only exposed with DEBUG on."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the media API error handlers on app. Called once from create_app()."""
    app.add_exception_handler(PropertyMediaException, _property_media_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
