"""Dogs service persistence: settings, session management, ORM table, repository."""

from dogs_service.persistence.database import (
    DatabaseManager,
    DatabaseSettings,
    DbSession,
    get_database_manager,
    get_db_session,
)
from dogs_service.persistence.lifespan import LIFESPAN_PRIORITY_PERSISTENCE, persistence_lifespan
from dogs_service.persistence.models import Base, DogRow
from dogs_service.persistence.repository import DogRepository

__all__ = [
    "LIFESPAN_PRIORITY_PERSISTENCE",
    "Base",
    "DatabaseManager",
    "DatabaseSettings",
    "DbSession",
    "DogRepository",
    "DogRow",
    "get_database_manager",
    "get_db_session",
    "persistence_lifespan",
]
