"""Exception handlers translating errors that escape route handlers.

Route handlers translate persistence outcomes themselves; what reaches this
module is either a validation failure raised before any persistence call or
something nobody anticipated. Two response shapes are produced:

- The legacy client-error bodies ``{"message": ...}`` (bad id) and
  ``{"errors": [...]}`` (payload validation).
- RFC 7807 problem details (``application/problem+json``) for everything else.

Usage:
    from dogs_service.api.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dogs_service.api.middleware.request_id import REQUEST_ID_HEADER, get_request_id
from dogs_service.domain.exceptions import (
    DogValidationError,
    DomainError,
    InvalidDogIdError,
    PersistenceError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response model.

    ``error_code``, ``context`` and ``correlation_id`` are extension fields;
    ``correlation_id`` is only set on 5xx responses.
    """

    type: str = Field(..., description="URI reference identifying problem type")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., ge=400, le=599, description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str | None = Field(default=None, description="Request path")
    error_code: str | None = Field(default=None, description="Machine-readable error code")
    context: dict[str, Any] | None = Field(default=None, description="Debugging information")
    correlation_id: str | None = Field(default=None, description="Request correlation ID")


_SENSITIVE_PATTERNS = [
    (
        re.compile(r"(postgresql|sqlite)(\+\w+)?://[^@\s]*@[^/\s]*"),
        r"\1\2://[REDACTED]@[REDACTED]",
    ),
    (
        re.compile(r"password\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE),
        "password=[REDACTED]",
    ),
    (
        re.compile(r"secret\s*=\s*['\"]?[^'\"\s]+['\"]?", re.IGNORECASE),
        "secret=[REDACTED]",
    ),
]

_SENSITIVE_KEYS = frozenset({"password", "secret", "token", "api_key", "credential"})


def redact_sensitive_strings(text: str) -> str:
    """Redact credentials and connection strings from ``text``."""
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_sensitive_strings(value)
    if isinstance(value, dict):
        return _sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(v) for v in value]
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any] | None:
    """Drop sensitive keys and make values JSON-safe; ``None`` when empty."""
    if context is None:
        return None
    sanitized = {
        key: _sanitize_value(value)
        for key, value in context.items()
        if key.lower() not in _SENSITIVE_KEYS
    }
    return sanitized or None


def _create_problem_response(
    problem: ProblemDetail,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


def _get_correlation_id(request: Request) -> str:
    """Request ID from context, else from request state (set by the middleware)."""
    request_id = get_request_id() or getattr(request.state, "request_id", "")
    return request_id or "unknown"


async def invalid_dog_id_handler(request: Request, exc: InvalidDogIdError) -> JSONResponse:
    """Non-integer path id -> 400 ``{"message": "id should be a number"}``."""
    return JSONResponse(status_code=400, content={"message": exc.message})


async def dog_validation_handler(request: Request, exc: DogValidationError) -> JSONResponse:
    """Payload validation failure -> 400 ``{"errors": [...]}``."""
    return JSONResponse(status_code=400, content={"errors": exc.errors})


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Store failure outside a handler's own translation -> 500."""
    correlation_id = _get_correlation_id(request)
    logger.error(
        "persistence_error",
        extra={
            "correlation_id": correlation_id,
            "path": str(request.url.path),
            "method": request.method,
            "error": redact_sensitive_strings(str(exc)),
        },
    )
    problem = ProblemDetail(
        type="/errors/persistence-error",
        title="Internal Server Error",
        status=500,
        detail="The data store could not complete the request.",
        instance=str(request.url.path),
        error_code=exc.error_code,
        correlation_id=correlation_id,
    )
    return _create_problem_response(problem)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Fallback for domain errors without a specific handler -> 400."""
    problem = ProblemDetail(
        type="/errors/domain-error",
        title="Bad Request",
        status=400,
        detail=redact_sensitive_strings(exc.message),
        instance=str(request.url.path),
        error_code=exc.error_code,
        context=_sanitize_context(exc.context),
    )
    return _create_problem_response(problem)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON or a non-object body -> 400 with the failing locations."""
    errors = [
        {
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    problem = ProblemDetail(
        type="/errors/request-validation-error",
        title="Request Validation Error",
        status=400,
        detail="Request validation failed",
        instance=str(request.url.path),
        error_code="REQUEST_VALIDATION_ERROR",
        context={"errors": errors},
    )
    return _create_problem_response(problem)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the full exception, return a sanitized 500.

    In debug mode the exception type and message are included in the body.
    """
    correlation_id = _get_correlation_id(request)

    logger.exception(
        "unhandled_exception",
        extra={
            "correlation_id": correlation_id,
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    if getattr(request.app, "debug", False):
        detail = redact_sensitive_strings(f"{type(exc).__name__}: {exc}")
        context: dict[str, Any] | None = {"exception_type": type(exc).__name__}
    else:
        detail = "An internal error occurred. Please contact support with the correlation ID."
        context = None

    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=str(request.url.path),
        error_code="INTERNAL_ERROR",
        context=context,
        correlation_id=correlation_id,
    )
    # Runs outside RequestIdMiddleware, so the header is not added for us.
    return _create_problem_response(problem, headers={REQUEST_ID_HEADER: correlation_id})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers, most specific first.

    1. InvalidDogIdError -> 400 (legacy message body)
    2. DogValidationError -> 400 (legacy errors body)
    3. PersistenceError -> 500
    4. DomainError -> 400
    5. RequestValidationError -> 400
    6. Exception -> 500
    """
    # Starlette's handler typing is stricter than the runtime dispatch.
    app.add_exception_handler(InvalidDogIdError, invalid_dog_id_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DogValidationError, dog_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PersistenceError, persistence_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
