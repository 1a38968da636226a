"""Dog repository: CRUD over the ``dogs`` table.

Async repository bound to one request-scoped session. Store failures are
re-raised as domain exceptions so callers can branch on the error *kind*:

- ``DogNotFoundError``: no row with the requested id.
- ``DogConstraintError``: the store (or field validation) rejected the data.
- ``PersistenceError``: anything else the store raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    SQLAlchemyError,
    StatementError,
)

from dogs_service.domain import (
    DogConstraintError,
    DogNotFoundError,
    DogRecord,
    PersistenceError,
    validate_dog_changes,
)
from dogs_service.persistence.models import DogRow

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class DogRepository:
    """Read/write access to dog records.

    Each mutating method commits its own transaction.

    Args:
        session: Async SQLAlchemy session for the current request.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self, name_has: str | None = None) -> list[DogRecord]:
        """List dogs, optionally those whose name contains ``name_has``.

        The match is a case-sensitive substring match; ``%`` and ``_`` in
        ``name_has`` are matched literally.
        """
        stmt = select(DogRow).order_by(DogRow.id)
        if name_has:
            stmt = stmt.where(DogRow.name.contains(name_has, autoescape=True))
        try:
            result = await self._session.scalars(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return [row.to_record() for row in result.all()]

    async def get(self, dog_id: int) -> DogRecord | None:
        """Fetch one dog, or ``None`` when absent."""
        try:
            row = await self._session.get(DogRow, dog_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        return row.to_record() if row is not None else None

    async def create(
        self,
        *,
        name: str,
        description: str,
        breed: str | None = None,
        age: int | float | None = None,
    ) -> DogRecord:
        """Insert a dog and return it with its assigned id.

        Raises:
            DogConstraintError: If the store rejects the row.
            PersistenceError: On any other store failure.
        """
        row = DogRow(name=name, description=description, breed=breed, age=age)
        self._session.add(row)
        await self._commit()
        return row.to_record()

    async def update(self, dog_id: int, changes: dict[str, Any]) -> DogRecord:
        """Apply a partial update and return the updated dog.

        Raises:
            DogNotFoundError: If no dog has ``dog_id``.
            DogConstraintError: If a field is unknown, read-only, or rejected.
            DogValidationError: If a value has the wrong type.
            PersistenceError: On any other store failure.
        """
        normalised = validate_dog_changes(changes)
        row = await self._get_row(dog_id)
        for key, value in normalised.items():
            setattr(row, key, value)
        await self._commit()
        return row.to_record()

    async def delete(self, dog_id: int) -> DogRecord:
        """Delete a dog and return the record as it was.

        Raises:
            DogNotFoundError: If no dog has ``dog_id``.
            PersistenceError: On any other store failure.
        """
        row = await self._get_row(dog_id)
        record = row.to_record()
        await self._session.delete(row)
        await self._commit()
        return record

    async def _get_row(self, dog_id: int) -> DogRow:
        try:
            row = await self._session.get(DogRow, dog_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc
        if row is None:
            raise DogNotFoundError(dog_id)
        return row

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except (IntegrityError, DataError) as exc:
            await self._session.rollback()
            raise DogConstraintError(str(exc.orig)) from exc
        except DBAPIError as exc:
            await self._session.rollback()
            raise PersistenceError(str(exc.orig)) from exc
        except StatementError as exc:
            # Raised before the statement reaches the store, e.g. unbindable values.
            await self._session.rollback()
            raise DogConstraintError(str(exc.orig or exc)) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError(str(exc)) from exc
