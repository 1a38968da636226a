"""FastAPI application factory.

:func:`create_app` builds the application with its database manager,
middleware, exception handlers, lifespan hooks and routers. Each call
returns an independent application, so tests can run several side by side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from dogs_service.api.error_handlers import register_exception_handlers
from dogs_service.api.lifespan import LifespanContribution, compose_lifespan
from dogs_service.api.middleware.request_id import RequestIdMiddleware
from dogs_service.api.router import root_router, router
from dogs_service.api.settings import AppSettings
from dogs_service.observability import LIFESPAN_PRIORITY_LOGGING, logging_lifespan
from dogs_service.persistence import (
    LIFESPAN_PRIORITY_PERSISTENCE,
    DatabaseManager,
    DatabaseSettings,
    persistence_lifespan,
)

if TYPE_CHECKING:
    from fastapi import APIRouter

logger = logging.getLogger(__name__)

DEFAULT_LIFESPAN_HOOKS: tuple[LifespanContribution, ...] = (
    LifespanContribution(hook=logging_lifespan, priority=LIFESPAN_PRIORITY_LOGGING),
    LifespanContribution(hook=persistence_lifespan, priority=LIFESPAN_PRIORITY_PERSISTENCE),
)


def create_app(
    settings: AppSettings | None = None,
    *,
    database: DatabaseManager | None = None,
    extra_routers: list[APIRouter] | None = None,
    extra_lifespan_hooks: list[LifespanContribution] | None = None,
) -> FastAPI:
    """Create the dogs service application.

    Args:
        settings: Application settings. If ``None``, loaded from environment.
        database: Database manager to use. If ``None``, one is built from
            ``DatabaseSettings`` loaded from the environment.
        extra_routers: Additional routers to include after the dog routes.
        extra_lifespan_hooks: Additional lifespan hooks.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or AppSettings()
    database = database or DatabaseManager(DatabaseSettings())

    hooks = [*DEFAULT_LIFESPAN_HOOKS, *(extra_lifespan_hooks or [])]

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=compose_lifespan(hooks),
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=settings.cors.expose_headers,
    )
    # Added last so it wraps CORS and sees every response.
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    for api_router in [root_router, router, *(extra_routers or [])]:
        app.include_router(api_router)
        logger.info("Included router: %r", api_router)

    return app
