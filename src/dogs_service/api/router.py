"""Dog REST API router.

One handler per route. Handlers validate input (or let the ``DogId``
dependency do it), call the repository once and pick the status code.
Absent records are reported as 204 with an empty body on show and delete.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from dogs_service.api.dependencies import DogId, DogRepo  # noqa: TC001 - resolved at runtime
from dogs_service.api.error_handlers import redact_sensitive_strings
from dogs_service.domain import (
    DogConstraintError,
    DogNotFoundError,
    DogRecord,
    DomainError,
    PersistenceError,
    validate_new_dog,
)
from dogs_service.observability import get_logger

logger = get_logger(__name__)

root_router = APIRouter(tags=["root"])
router = APIRouter(prefix="/dogs", tags=["dogs"])

JsonObject = Annotated[dict[str, Any] | None, Body()]


# -- Response models ----------------------------------------------------------


class DogResponse(BaseModel):
    id: int
    name: str
    description: str
    breed: str | None = None
    age: int | float | None = None


class MessageResponse(BaseModel):
    message: str


# -- Endpoints ----------------------------------------------------------------


@root_router.get("/")
async def hello() -> MessageResponse:
    return MessageResponse(message="Hello World!")


@router.get("", response_model=list[DogResponse])
async def list_dogs(
    repository: DogRepo,
    name_has: Annotated[str | None, Query(alias="nameHas")] = None,
) -> list[DogResponse]:
    """List dogs whose name contains ``nameHas`` (case-sensitive), or all dogs."""
    records = await repository.list_all(name_has)
    return [_dog_response(record) for record in records]


@router.post(
    "",
    status_code=201,
    response_model=DogResponse,
    responses={400: {"description": "Invalid keys or fields"}, 500: {"description": "Store error"}},
)
async def create_dog(repository: DogRepo, payload: JsonObject = None) -> Any:
    """Create a dog from ``name``, ``description`` and optional ``breed``/``age``."""
    fields = validate_new_dog(payload or {})
    try:
        record = await repository.create(**fields)
    except DogConstraintError as exc:
        logger.warning("dog_create_rejected", error=exc.message)
        return JSONResponse(status_code=400, content={"errors": [exc.message]})
    except PersistenceError as exc:
        message = redact_sensitive_strings(exc.message)
        logger.error("dog_create_failed", error=message)
        return JSONResponse(status_code=500, content={"errors": [message]})
    logger.info("dog_created", dog_id=record.id)
    return _dog_response(record)


@router.get(
    "/{dog_id}",
    response_model=DogResponse,
    responses={204: {"description": "No dog with this id"}, 400: {"description": "Invalid id"}},
)
async def show_dog(dog_id: DogId, repository: DogRepo) -> Any:
    """Retrieve a dog by id."""
    record = await repository.get(dog_id)
    if record is None:
        return Response(status_code=204)
    return _dog_response(record)


@router.patch(
    "/{dog_id}",
    status_code=201,
    response_model=DogResponse,
    responses={400: {"description": "Invalid id, unknown dog or rejected change"}},
)
async def update_dog(dog_id: DogId, repository: DogRepo, payload: JsonObject = None) -> Any:
    """Apply a partial update. Every failure is reported as 400 without detail."""
    try:
        record = await repository.update(dog_id, payload or {})
    except DomainError as exc:
        logger.warning("dog_update_failed", dog_id=dog_id, error_code=exc.error_code)
        return JSONResponse(status_code=400, content={"errors": ""})
    logger.info("dog_updated", dog_id=dog_id)
    return _dog_response(record)


@router.delete(
    "/{dog_id}",
    response_model=DogResponse,
    responses={204: {"description": "No dog with this id"}, 400: {"description": "Invalid id"}},
)
async def delete_dog(dog_id: DogId, repository: DogRepo) -> Any:
    """Delete a dog and return it as it was."""
    try:
        record = await repository.delete(dog_id)
    except DogNotFoundError:
        return Response(status_code=204)
    except DomainError as exc:
        logger.error(
            "dog_delete_failed",
            dog_id=dog_id,
            error=redact_sensitive_strings(exc.message),
        )
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})
    logger.info("dog_deleted", dog_id=dog_id)
    return _dog_response(record)


# -- Helpers ------------------------------------------------------------------


def _dog_response(record: DogRecord) -> DogResponse:
    return DogResponse(**record.to_dict())
