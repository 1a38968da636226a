"""SQLAlchemy table mapping for dog records."""

from __future__ import annotations

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from dogs_service.domain import DogRecord


class Base(DeclarativeBase):
    pass


class DogRow(Base):
    __tablename__ = "dogs"
    # Without AUTOINCREMENT, SQLite hands out the id of a deleted last row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    breed: Mapped[str | None] = mapped_column(String, nullable=True)
    age: Mapped[float | None] = mapped_column(Float, nullable=True)

    def to_record(self) -> DogRecord:
        age = self.age
        if isinstance(age, float) and age.is_integer():
            age = int(age)
        return DogRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            breed=self.breed,
            age=age,
        )
