"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging and the storage gateway.
No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from property_media.infrastructure.external.storage.factory import StorageFactory
from property_media.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, then the storage gateway (backend chosen once from
    settings). A gateway already placed on app.state (tests) is kept.
    """
    setup_logging()

    if getattr(app.state, "storage_gateway", None) is None:
        app.state.storage_gateway = StorageFactory.create_gateway()
    logger.info("Storage gateway ready (backend=%s)", app.state.storage_gateway.backend_name)

    yield

    app.state.storage_gateway = None
    logger.info("Storage gateway released")
