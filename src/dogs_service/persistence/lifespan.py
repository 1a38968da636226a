"""Persistence lifespan hook for startup/shutdown resource management.

Handles:
- Schema creation for the ``dogs`` table (when enabled)
- Database health check on startup (SELECT 1)
- Engine disposal on shutdown

Priority 75 ensures persistence starts AFTER logging (50).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text

from dogs_service.persistence.models import Base

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from dogs_service.persistence.database import DatabaseManager

logger = logging.getLogger(__name__)

LIFESPAN_PRIORITY_PERSISTENCE = 75


@asynccontextmanager
async def persistence_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage the application's database resources.

    Startup:
        1. Create missing tables if ``create_schema`` is enabled.
        2. Execute ``SELECT 1`` on the async engine.

    Shutdown:
        1. Dispose the engine and its connection pool.

    Args:
        app: The application; its ``state.database`` holds the manager.
    """
    manager: DatabaseManager = app.state.database
    engine = manager.get_engine()

    if manager.settings.create_schema:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("persistence_lifespan: schema ensured")

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("persistence_lifespan: database health check passed")

    try:
        yield
    finally:
        await manager.dispose()
        logger.info("persistence_lifespan: database engine disposed")
