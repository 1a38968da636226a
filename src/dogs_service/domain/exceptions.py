"""Domain exception hierarchy for the dogs service.

Exceptions carry a machine-readable error code and structured context so
the API layer can translate them into HTTP responses by *kind* rather than
by inspecting message text.

Example:
    >>> from dogs_service.domain.exceptions import DogNotFoundError
    >>> raise DogNotFoundError(42)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DogConstraintError",
    "DogNotFoundError",
    "DogValidationError",
    "DomainError",
    "InvalidDogIdError",
    "InvalidKeysError",
    "NotFoundError",
    "PersistenceError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist.

    Attributes:
        resource_type: Type of missing resource.
        resource_id: Identifier of missing resource.
    """

    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: int | str, **extra_context: Any) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found: {resource_id}"
        context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            **extra_context,
        }
        super().__init__(message, context)


class DogNotFoundError(NotFoundError):
    """Raised when no dog exists with the given id."""

    def __init__(self, dog_id: int) -> None:
        super().__init__("Dog", dog_id)


class InvalidDogIdError(DomainError):
    """Raised when a path identifier is not a base-10 integer."""

    error_code: str = "INVALID_ID"

    def __init__(self, raw_id: str) -> None:
        self.raw_id = raw_id
        super().__init__("id should be a number", {"raw_id": raw_id})


class DogValidationError(DomainError):
    """Raised when a dog payload fails field validation.

    Unlike a single-field error, this carries every message collected for
    the payload so the client sees the full list at once.

    Attributes:
        errors: Human-readable validation messages, in detection order.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors), {"errors": self.errors})

    def __str__(self) -> str:
        return self.message


class InvalidKeysError(DogValidationError):
    """Raised when a payload contains keys outside the allowed set."""

    error_code: str = "INVALID_KEYS"

    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)
        joined = "', '".join(self.keys)
        super().__init__([f"'{joined}' is not a valid key"])


class DogConstraintError(DomainError):
    """Raised when the store rejects a write (type, NOT NULL, unknown column).

    Maps to a client error: the request carried data the store cannot accept.
    """

    error_code: str = "CONSTRAINT_VIOLATION"


class PersistenceError(DomainError):
    """Raised for store failures that are not attributable to the request."""

    error_code: str = "PERSISTENCE_ERROR"
