"""Dog record type and payload validation.

Validation runs before any persistence call:

- ``validate_new_dog`` checks a create payload (allowed keys first, then
  collects every field error).
- ``validate_dog_changes`` checks a partial update and raises on the first
  problem, since update failures are reported without detail.
- ``parse_dog_id`` turns a path segment into a record id.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Any

from dogs_service.domain.exceptions import (
    DogConstraintError,
    DogValidationError,
    InvalidDogIdError,
    InvalidKeysError,
)

ALLOWED_KEYS: tuple[str, ...] = ("name", "description", "breed", "age")

# Signed 32-bit INTEGER, the narrowest primary key type among supported stores.
MAX_DOG_ID = 2**31 - 1

# Leading whitespace, optional sign, then the leading run of digits; the rest is ignored.
_ID_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True, slots=True)
class DogRecord:
    """A persisted dog.

    ``id`` is assigned by the store and never changes afterwards.
    """

    id: int
    name: str
    description: str
    breed: str | None = None
    age: int | float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_dog_id(raw_id: str) -> int:
    """Parse the leading base-10 integer of a path identifier.

    Trailing characters are ignored, so ``"12abc"`` and ``"1.5"`` parse as
    12 and 1.

    Raises:
        InvalidDogIdError: If ``raw_id`` has no leading digits or the value
            is outside the id range.
    """
    match = _ID_PATTERN.match(raw_id)
    if match is None:
        raise InvalidDogIdError(raw_id)
    dog_id = int(match.group(1))
    if abs(dog_id) > MAX_DOG_ID:
        raise InvalidDogIdError(raw_id)
    return dog_id


def coerce_age(value: Any) -> int | float:
    """Coerce an age value to a finite number.

    Numbers pass through and numeric strings are parsed. Integral values come
    back as ``int``.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, bool):
        msg = "booleans are not numbers"
        raise ValueError(msg)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            msg = "empty string"
            raise ValueError(msg)
        number: int | float = float(text)
    elif isinstance(value, (int, float)):
        number = value
    else:
        msg = f"unsupported type {type(value).__name__}"
        raise ValueError(msg)

    try:
        as_float = float(number)
    except OverflowError as exc:
        raise ValueError(str(exc)) from exc
    if not math.isfinite(as_float):
        msg = "age must be finite"
        raise ValueError(msg)
    if as_float.is_integer():
        return int(as_float)
    return as_float


def validate_new_dog(payload: dict[str, Any]) -> dict[str, Any]:
    """Validate a create payload and return the fields to persist.

    Raises:
        InvalidKeysError: If any key is outside ``ALLOWED_KEYS``. Checked
            before field types, so it wins over every other error.
        DogValidationError: With the full list of field errors.
    """
    invalid_keys = [key for key in payload if key not in ALLOWED_KEYS]
    if invalid_keys:
        raise InvalidKeysError(invalid_keys)

    errors: list[str] = []
    name = payload.get("name")
    description = payload.get("description")
    breed = payload.get("breed")
    age = payload.get("age")

    if not isinstance(name, str):
        errors.append("name should be a string")
    if not isinstance(description, str):
        errors.append("description should be a string")
    if breed is not None and not isinstance(breed, str):
        errors.append("breed should be a string")
    if age is not None:
        try:
            age = coerce_age(age)
        except ValueError:
            errors.append("age should be a number")

    if errors:
        raise DogValidationError(errors)

    return {"name": name, "description": description, "breed": breed, "age": age}


def validate_dog_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial update and return the normalised changes.

    Raises:
        DogConstraintError: If a key is not a writable column (``id`` included).
        DogValidationError: If a value has the wrong type.
    """
    unknown = [key for key in changes if key not in ALLOWED_KEYS]
    if unknown:
        raise DogConstraintError(
            "Unknown or read-only fields",
            {"fields": unknown},
        )

    normalised: dict[str, Any] = {}
    for key, value in changes.items():
        if key in ("name", "description"):
            if not isinstance(value, str):
                raise DogValidationError([f"{key} should be a string"])
        elif key == "breed":
            if value is not None and not isinstance(value, str):
                raise DogValidationError(["breed should be a string"])
        elif key == "age" and value is not None:
            try:
                value = coerce_age(value)
            except ValueError as exc:
                raise DogValidationError(["age should be a number"]) from exc
        normalised[key] = value
    return normalised
