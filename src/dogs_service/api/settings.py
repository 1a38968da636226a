"""Application and server settings.

Provides Pydantic Settings for the FastAPI application, its CORS policy,
and the listener (host and mode-dependent port).
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

TEST_ENVIRONMENT = "test"
DEFAULT_PORT = 3000
TEST_PORT = 3001


class CORSSettings(BaseSettings):
    """CORS policy configuration.

    Environment variables use the ``CORS_`` prefix (e.g., ``CORS_ALLOW_ORIGINS``).
    Comma-separated strings are parsed into lists.
    """

    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    allow_origins: Annotated[list[str], NoDecode] = Field(default=["*"])
    allow_methods: Annotated[list[str], NoDecode] = Field(default=["*"])
    allow_headers: Annotated[list[str], NoDecode] = Field(default=["*"])
    allow_credentials: bool = Field(default=False)
    expose_headers: Annotated[list[str], NoDecode] = Field(default=["X-Request-ID"])

    @field_validator(
        "allow_origins",
        "allow_methods",
        "allow_headers",
        "expose_headers",
        mode="before",
    )
    @classmethod
    def _parse_comma_separated(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, list):
            return v
        return ["*"]

    @model_validator(mode="after")
    def _validate_credentials_with_wildcard(self) -> CORSSettings:
        if self.allow_credentials and self.allow_origins == ["*"]:
            msg = (
                "CORS allow_credentials=True cannot be used with allow_origins=['*']. "
                "Specify explicit origins instead."
            )
            raise ValueError(msg)
        return self


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use the ``APP_`` prefix (e.g., ``APP_DEBUG``).
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        extra="ignore",
    )

    title: str = Field(default="Dogs Service")
    version: str = Field(default="0.1.0")
    description: str = Field(default="CRUD over dog records")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str | None = Field(default="/openapi.json")
    debug: bool = Field(default=False)
    cors: CORSSettings = Field(default_factory=CORSSettings)


class ServerSettings(BaseSettings):
    """Listener settings for the process entry point.

    The ``ENVIRONMENT`` mode flag selects the port: ``test`` listens on 3001,
    anything else on 3000. ``APP_PORT`` overrides both.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "environment"),
    )
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port_override: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("APP_PORT", "port_override"),
    )

    @property
    def port(self) -> int:
        if self.port_override is not None:
            return self.port_override
        if self.environment == TEST_ENVIRONMENT:
            return TEST_PORT
        return DEFAULT_PORT
