"""Dogs service domain: the dog record, payload validation, exceptions."""

from dogs_service.domain.dog import (
    ALLOWED_KEYS,
    DogRecord,
    coerce_age,
    parse_dog_id,
    validate_dog_changes,
    validate_new_dog,
)
from dogs_service.domain.exceptions import (
    DogConstraintError,
    DogNotFoundError,
    DogValidationError,
    DomainError,
    InvalidDogIdError,
    InvalidKeysError,
    NotFoundError,
    PersistenceError,
)

__all__ = [
    "ALLOWED_KEYS",
    "DogConstraintError",
    "DogNotFoundError",
    "DogRecord",
    "DogValidationError",
    "DomainError",
    "InvalidDogIdError",
    "InvalidKeysError",
    "NotFoundError",
    "PersistenceError",
    "coerce_age",
    "parse_dog_id",
    "validate_dog_changes",
    "validate_new_dog",
]
