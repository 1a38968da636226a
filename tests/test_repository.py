"""Unit tests for dogs_service.persistence.repository against in-memory SQLite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from dogs_service.domain import (
    DogConstraintError,
    DogNotFoundError,
    DogValidationError,
    PersistenceError,
)
from dogs_service.persistence import DogRepository


@pytest.mark.unit
class TestDogRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_id(self, repository: DogRepository) -> None:
        record = await repository.create(name="Rex", description="friendly", breed="lab", age=3)
        assert isinstance(record.id, int)
        assert (record.name, record.description, record.breed, record.age) == (
            "Rex",
            "friendly",
            "lab",
            3,
        )

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, repository: DogRepository) -> None:
        first = await repository.create(name="Rex", description="a")
        second = await repository.create(name="Fido", description="b")
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository: DogRepository) -> None:
        assert await repository.get(999) is None

    @pytest.mark.asyncio
    async def test_get_round_trips_age(self, repository: DogRepository) -> None:
        created = await repository.create(name="Rex", description="a", age=2.5)
        fetched = await repository.get(created.id)
        assert fetched is not None
        assert fetched.age == 2.5

    @pytest.mark.asyncio
    async def test_list_all_without_filter(self, repository: DogRepository) -> None:
        await repository.create(name="Rex", description="a")
        await repository.create(name="Fido", description="b")
        names = [dog.name for dog in await repository.list_all()]
        assert names == ["Rex", "Fido"]

    @pytest.mark.asyncio
    async def test_list_all_filters_by_substring(self, repository: DogRepository) -> None:
        await repository.create(name="Rex", description="a")
        await repository.create(name="Fido", description="b")
        await repository.create(name="Direx", description="c")
        names = [dog.name for dog in await repository.list_all("ex")]
        assert names == ["Rex", "Direx"]

    @pytest.mark.asyncio
    async def test_list_all_is_case_sensitive(self, repository: DogRepository) -> None:
        await repository.create(name="Rex", description="a")
        assert await repository.list_all("re") == []

    @pytest.mark.asyncio
    async def test_list_all_treats_wildcards_literally(self, repository: DogRepository) -> None:
        await repository.create(name="Rex", description="a")
        await repository.create(name="100%", description="b")
        names = [dog.name for dog in await repository.list_all("%")]
        assert names == ["100%"]

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, repository: DogRepository) -> None:
        created = await repository.create(name="Rex", description="a", breed="lab")
        updated = await repository.update(created.id, {"age": "4"})
        assert updated.id == created.id
        assert updated.age == 4
        assert updated.breed == "lab"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, repository: DogRepository) -> None:
        with pytest.raises(DogNotFoundError):
            await repository.update(999, {"name": "Ghost"})

    @pytest.mark.asyncio
    async def test_update_rejects_id_change(self, repository: DogRepository) -> None:
        created = await repository.create(name="Rex", description="a")
        with pytest.raises(DogConstraintError):
            await repository.update(created.id, {"id": created.id + 1})

    @pytest.mark.asyncio
    async def test_update_rejects_bad_type(self, repository: DogRepository) -> None:
        created = await repository.create(name="Rex", description="a")
        with pytest.raises(DogValidationError):
            await repository.update(created.id, {"age": "old"})

    @pytest.mark.asyncio
    async def test_delete_returns_record_then_not_found(self, repository: DogRepository) -> None:
        created = await repository.create(name="Rex", description="a")
        deleted = await repository.delete(created.id)
        assert deleted == created
        assert await repository.get(created.id) is None
        with pytest.raises(DogNotFoundError):
            await repository.delete(created.id)


@pytest.mark.unit
class TestDogRepositoryErrorKinds:
    """Store exceptions are surfaced as structured domain errors."""

    @staticmethod
    def _session_failing_commit(exc: Exception) -> MagicMock:
        session = MagicMock()
        session.commit = AsyncMock(side_effect=exc)
        session.rollback = AsyncMock()
        return session

    @pytest.mark.asyncio
    async def test_integrity_error_is_constraint_error(self) -> None:
        exc = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: dogs.name"))
        session = self._session_failing_commit(exc)
        repository = DogRepository(session)

        with pytest.raises(DogConstraintError, match="NOT NULL constraint failed"):
            await repository.create(name="Rex", description="a")
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_operational_error_is_persistence_error(self) -> None:
        exc = OperationalError("INSERT", {}, Exception("database is locked"))
        session = self._session_failing_commit(exc)
        repository = DogRepository(session)

        with pytest.raises(PersistenceError, match="database is locked"):
            await repository.create(name="Rex", description="a")
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_failure_is_persistence_error(self) -> None:
        session = MagicMock()
        session.get = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("gone")))
        repository = DogRepository(session)

        with pytest.raises(PersistenceError):
            await repository.get(1)
