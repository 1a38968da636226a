"""Shared fixtures: an in-memory SQLite store and a fresh app per test."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from dogs_service.api import AppSettings, create_app
from dogs_service.persistence import Base, DatabaseManager, DatabaseSettings, DogRepository

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession

IN_MEMORY_URL = "sqlite+aiosqlite://"


@pytest.fixture()
def database() -> DatabaseManager:
    """Database manager over a private in-memory SQLite database."""
    return DatabaseManager(DatabaseSettings(url=IN_MEMORY_URL))


@pytest.fixture()
def app(database: DatabaseManager) -> FastAPI:
    return create_app(AppSettings(), database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """TestClient with lifespan hooks executed (schema created on startup)."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest_asyncio.fixture()
async def session(database: DatabaseManager) -> AsyncIterator[AsyncSession]:
    """Session over a freshly created schema, for repository-level tests."""
    engine = database.get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with database.get_session_factory()() as s:
        yield s
    await database.dispose()


@pytest.fixture()
def repository(session: AsyncSession) -> DogRepository:
    return DogRepository(session)
