"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, document
store client, photo storage).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from concierge.core.config import get_settings
from concierge.infrastructure.external.storage import StorageFactory
from concierge.infrastructure.firebase.client import close_firebase, init_document_store
from concierge.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, document store, photo storage. A document store
    that fails to initialize leaves the app up with readiness reporting 503;
    storage that cannot be configured disables the photo sweeps only.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    if not init_document_store():
        logger.error("Document store not initialized (backend=%s)", settings.database_backend)

    try:
        app.state.storage = StorageFactory.create_storage_service(settings)
    except ValueError as e:
        logger.warning("Photo storage not configured: %s", e)
        app.state.storage = None

    yield

    # ---- Shutdown ----
    if getattr(app.state, "storage", None) is not None:
        await app.state.storage.aclose()
        app.state.storage = None
        logger.info("Photo storage client closed")

    await close_firebase()
