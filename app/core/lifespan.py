"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (Firestore client, Redis cache,
asset storage). No business logic here. Routes read these from app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Firestore client, Redis cache (if enabled), asset storage.
    Shutdown order: cache disconnect, Firestore client close.
    """
    settings = get_settings()

    # ---- Startup ----
    init_firebase()
    app.state.firestore = get_firestore_client()

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis disabled; post listings are served from the store")

    from app.infrastructure.external.storage import StorageFactory

    try:
        app.state.asset_storage = StorageFactory.create_storage_service(settings)
    except (ValueError, OSError):
        logger.exception("Asset storage unavailable; image uploads disabled")
        app.state.asset_storage = None

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await close_firebase()
    app.state.firestore = None
