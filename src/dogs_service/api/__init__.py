"""Dogs service HTTP layer: routes, error handlers, middleware, app factory."""

from dogs_service.api.app_factory import create_app
from dogs_service.api.error_handlers import ProblemDetail, register_exception_handlers
from dogs_service.api.lifespan import LifespanContribution, compose_lifespan
from dogs_service.api.middleware.request_id import RequestIdMiddleware, get_request_id
from dogs_service.api.settings import AppSettings, CORSSettings, ServerSettings

__all__ = [
    "AppSettings",
    "CORSSettings",
    "LifespanContribution",
    "ProblemDetail",
    "RequestIdMiddleware",
    "ServerSettings",
    "compose_lifespan",
    "create_app",
    "get_request_id",
    "register_exception_handlers",
]
