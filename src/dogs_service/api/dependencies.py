"""FastAPI dependencies for the dog routes.

The repository is injected per request so tests can swap it through
``app.dependency_overrides[get_dog_repository]``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from dogs_service.domain import parse_dog_id
from dogs_service.persistence import DbSession, DogRepository


def get_dog_repository(session: DbSession) -> DogRepository:
    """Repository bound to the request's database session."""
    return DogRepository(session)


def get_dog_id(dog_id: str) -> int:
    """Path parameter ``dog_id`` parsed as an integer.

    Raises:
        InvalidDogIdError: Translated to 400 by the exception handlers.
    """
    return parse_dog_id(dog_id)


DogRepo = Annotated[DogRepository, Depends(get_dog_repository)]
DogId = Annotated[int, Depends(get_dog_id)]
