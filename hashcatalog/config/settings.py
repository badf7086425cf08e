"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the hash catalog lookup service using
Pydantic Settings.

A single cached Settings instance is shared by the whole process; the
catalog core never reads the environment itself, it only receives the
resolved dataset path from the application bootstrap.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Dataset Path Discovery:
----------------------
DATABASE_PATH may be absolute or relative. Relative paths are tried
against, in order:

1. The installed package directory
2. The current working directory
3. The fully resolved path

The first candidate that exists wins. If none exist the raw value is
returned unchanged so the catalog store reports the missing file.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hashcatalog.core.exceptions import InvalidPathError


# Module logger
logger = logging.getLogger(__name__)

# Directory of the installed package, first candidate for relative paths
PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the service
        app_version: Service version reported by health checks
        app_env: Environment mode (development/staging/production)
        debug: Enable debug logging
        host: Server bind address
        port: Server port number
        database_path: Path to the reference catalog SQLite file
        query_timeout_seconds: Per-query time limit (0 disables)
        pool_size: Read-only connections kept in the pool
        max_overflow: Extra connections allowed under load
        pool_timeout: Seconds to wait for a free pooled connection
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings(database_path="rds/minimal.db")
        >>> settings.resolve_database_path()
        PosixPath('/srv/hashcatalog/rds/minimal.db')
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        # Environment variables are case-insensitive
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        # Validate default values
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Hash Catalog Lookup Service",
        description="Display name for the service"
    )

    app_version: str = Field(
        default="1.0.0",
        description="Service version reported by health checks"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production (production hides API docs)"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    database_path: str = Field(
        default="",
        description="Path to the reference catalog SQLite file (DATABASE_PATH)"
    )

    query_timeout_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Abort catalog queries running longer than this (0 disables)"
    )

    pool_size: int = Field(
        default=5,
        ge=1,
        le=64,
        description="Read-only connections kept in the pool"
    )

    max_overflow: int = Field(
        default=10,
        ge=0,
        le=128,
        description="Additional connections allowed under load"
    )

    pool_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a free pooled connection"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to 'development' with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("database_path")
    @classmethod
    def strip_database_path(cls, value: str) -> str:
        """Strip surrounding whitespace from the configured path."""
        return value.strip()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def query_timeout(self) -> float | None:
        """Query timeout in seconds, or None when disabled."""
        return self.query_timeout_seconds or None

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def resolve_database_path(self) -> Path:
        """
        Resolve the configured dataset path to a filesystem path.

        Returns:
            The first existing candidate, or the raw configured path

        Raises:
            InvalidPathError: If DATABASE_PATH is not configured
        """
        if not self.database_path:
            raise InvalidPathError(
                "Database path not configured. Set the DATABASE_PATH "
                "environment variable, e.g. "
                "DATABASE_PATH=./rds/minimal_patched_2025.06.01.db"
            )

        raw = Path(self.database_path).expanduser()
        if raw.is_absolute():
            return raw

        candidates = [
            PACKAGE_DIR / raw,
            Path.cwd() / raw,
            raw.resolve(),
        ]
        for candidate in candidates:
            if candidate.is_file():
                logger.debug(f"Resolved database path {raw} -> {candidate}")
                return candidate

        return raw

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"database_path={self.database_path!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Call get_settings.cache_clear() after changing the environment to
    force a reload (the test suite does this).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
