"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from anki_mcp.client import API_VERSION, DEFAULT_URL
from anki_mcp.resources import DEFAULT_SCHEME

SERVER_NAME = "anki-mcp"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # AnkiConnect
    ANKI_CONNECT_URL: str = DEFAULT_URL
    ANKI_CONNECT_VERSION: int = API_VERSION
    # None means calls block until the backend answers
    ANKI_CONNECT_TIMEOUT: float | None = None

    # Resources
    RESOURCE_SCHEME: str = DEFAULT_SCHEME

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str | None = None

    @field_validator("ANKI_CONNECT_URL", mode="after")
    @classmethod
    def validate_anki_connect_url(cls, value: str) -> str:
        """Require an http(s) URL for the AnkiConnect endpoint."""
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            msg = f"ANKI_CONNECT_URL must be an http:// or https:// URL, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("RESOURCE_SCHEME", mode="after")
    @classmethod
    def validate_resource_scheme(cls, value: str) -> str:
        """Resource URIs are built as <scheme>://<category>/<id>."""
        value = value.strip().lower()
        if not value.isalpha():
            msg = f"RESOURCE_SCHEME must be alphabetic, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        """Normalize the log level name."""
        if value is None:
            return None
        value = value.strip().upper()
        if value not in logging.getLevelNamesMapping():
            msg = f"Unknown LOG_LEVEL {value!r}"
            raise ValueError(msg)
        return value


def configure_logging(environment: str = "development", level: str | None = None) -> None:
    """Configure structured logging with structlog.

    Output goes to stderr: stdout is reserved for the MCP stdio transport.
    """
    use_json = environment == "production"

    if level is None:
        level = "DEBUG" if environment == "development" else "INFO"

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.getLevelNamesMapping()[level],
    )

    # Configure structlog
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
