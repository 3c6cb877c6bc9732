"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

WHY Pydantic Settings?
======================
1. Type Safety: All configuration values are validated against their types
2. Environment Variables: Automatically loads from environment variables
3. .env Support: Can load from .env files for local development
4. Validation: Catches configuration errors at startup, not runtime

PATTERN: Settings Singleton
===========================
A single Settings instance is cached using @lru_cache, so the
configuration is loaded once and every module sees the same values.

Usage:
    from booksearch.config import get_settings

    settings = get_settings()
    print(settings.books_api_url)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a default, so the service starts with no configuration
    at all and talks to the public Google Books endpoint.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Search",
        description="Application name displayed in logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Listener Settings
    # -------------------------------------------------------------------------
    host: str = Field(
        default="localhost",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=5050,
        ge=1,
        le=65535,
        description="Port to bind the server to"
    )

    # -------------------------------------------------------------------------
    # Upstream (Books API) Settings
    # -------------------------------------------------------------------------
    books_api_url: str = Field(
        default="https://www.googleapis.com/books/v1/volumes",
        description="Base URL of the external book-search endpoint"
    )
    books_api_query_prefix: str = Field(
        default="",
        description="Qualifier prepended to every query, e.g. 'inauthor:'"
    )
    upstream_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for calls to the books API"
    )
    upstream_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Connection retries for the books API transport"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("books_api_url")
    @classmethod
    def validate_books_api_url(cls, v: str) -> str:
        """
        Validate the books API URL.

        The query string is appended by the client, so the base URL must be
        an absolute http(s) URL without one.

        Raises:
            ValueError: If the URL is not http(s) or already has a query
        """
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("books_api_url must start with http:// or https://")
        if "?" in v:
            raise ValueError("books_api_url must not contain a query string")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment and .env file; later calls
    return the same instance.

    Returns:
        Cached Settings instance
    """
    return Settings()
