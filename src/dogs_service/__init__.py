"""Dogs service: HTTP CRUD over dog records."""

from dogs_service.api import create_app

__all__ = ["create_app"]
