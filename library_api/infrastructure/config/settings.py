import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from starlette.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def find_env_file() -> Optional[str]:
    """Locate the .env file to read settings from.

    LIBRARY_API_ENV_FILE wins when set; otherwise the first existing file of
    the project root and the working directory is used. Returns None when
    there is none, in which case only the process environment is read.
    """
    explicit = os.environ.get("LIBRARY_API_ENV_FILE")
    if explicit:
        return explicit
    for candidate in (PROJECT_ROOT / ".env", Path.cwd() / ".env"):
        if candidate.is_file():
            return str(candidate)
    return None


env_path = find_env_file()
logger.debug(f"Settings env file: {env_path}")

config = Config(env_path)


class EnvironmentOption(str, Enum):
    """Deployment environments; each selects a logging profile."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    LOCAL = "local"


class EnvironmentSettings(BaseSettings):
    """Which deployment environment the app runs in."""

    ENVIRONMENT: EnvironmentOption = config("ENVIRONMENT", default=EnvironmentOption.DEVELOPMENT, cast=EnvironmentOption)


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection, pool and bootstrap settings."""

    POSTGRES_USER: str = config("POSTGRES_USER", default="postgres")
    POSTGRES_PASSWORD: str = config("POSTGRES_PASSWORD", default="postgres")
    POSTGRES_SERVER: str = config("POSTGRES_SERVER", default="localhost")
    POSTGRES_PORT: int = config("POSTGRES_PORT", default=5432, cast=int)
    POSTGRES_DB: str = config("POSTGRES_DB", default="library")
    POSTGRES_MAINTENANCE_DB: str = config("POSTGRES_MAINTENANCE_DB", default="postgres")
    POSTGRES_ASYNC_PREFIX: str = config("POSTGRES_ASYNC_PREFIX", default="postgresql+asyncpg://")
    POSTGRES_URI: str = config("POSTGRES_URI", default="")
    CREATE_TABLES_ON_STARTUP: bool = config("CREATE_TABLES_ON_STARTUP", default=True, cast=bool)
    CREATE_DATABASE_ON_STARTUP: bool = config("CREATE_DATABASE_ON_STARTUP", default=True, cast=bool)

    POSTGRES_POOL_SIZE: int = config("POSTGRES_POOL_SIZE", default=20, cast=int)
    POSTGRES_MAX_OVERFLOW: int = config("POSTGRES_MAX_OVERFLOW", default=0, cast=int)

    @property
    def DATABASE_URL(self) -> str:
        """Get the full database URL.

        A complete connection string in POSTGRES_URI takes precedence over
        the individual POSTGRES_* parts.
        """
        if self.POSTGRES_URI:
            return self.POSTGRES_URI
        return (
            f"{self.POSTGRES_ASYNC_PREFIX}{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:"
            f"{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


class OperationSettings(BaseSettings):
    """Settings bounding individual service operations."""

    OPERATION_TIMEOUT_SECONDS: float = config("OPERATION_TIMEOUT_SECONDS", default=5.0, cast=float)


class APIDocSettings(BaseSettings):
    """Where the interactive API docs are served, and whether in production."""

    ENABLE_DOCS_IN_PRODUCTION: bool = config("ENABLE_DOCS_IN_PRODUCTION", default=False, cast=bool)
    DOCS_URL: str = config("DOCS_URL", default="/docs")
    REDOC_URL: str = config("REDOC_URL", default="/redoc")
    OPENAPI_URL: str = config("OPENAPI_URL", default="/openapi.json")


class AppSettings(BaseSettings):
    """Application identity and the address uvicorn binds to."""

    APP_NAME: str = config("APP_NAME", default="Library Management API")
    APP_DESCRIPTION: str = "REST API for managing users, books and book borrowing"
    DEBUG: bool = config("DEBUG", default=False, cast=bool)
    VERSION: str = "0.1.0"
    APP_HOST: str = config("APP_HOST", default="0.0.0.0")
    APP_PORT: int = config("APP_PORT", default=8000, cast=int)


class LoggingSettings(BaseSettings):
    """Log level, output format and destinations."""

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="structured")  # "simple", "detailed", "structured", "json"

    LOG_CONSOLE_ENABLED: bool = config("LOG_CONSOLE_ENABLED", default=True, cast=bool)
    LOG_FILE_ENABLED: bool = config("LOG_FILE_ENABLED", default=False, cast=bool)
    LOG_FILE_PATH: str = config("LOG_FILE_PATH", default="logs/library_api.log")
    LOG_FILE_MAX_SIZE: int = config("LOG_FILE_MAX_SIZE", default=10485760, cast=int)
    LOG_FILE_BACKUP_COUNT: int = config("LOG_FILE_BACKUP_COUNT", default=5, cast=int)

    LOG_CORRELATION_ID: bool = config("LOG_CORRELATION_ID", default=True, cast=bool)

    LOG_DEVELOPMENT_VERBOSE: bool = config("LOG_DEVELOPMENT_VERBOSE", default=True, cast=bool)
    LOG_PRODUCTION_OPTIMIZE: bool = config("LOG_PRODUCTION_OPTIMIZE", default=True, cast=bool)

    @property
    def LOG_LEVEL_INT(self) -> int:
        """LOG_LEVEL as a logging module level, INFO when unrecognised."""
        return logging.getLevelNamesMapping().get(self.LOG_LEVEL.upper(), logging.INFO)


class Settings(
    EnvironmentSettings,
    DatabaseSettings,
    OperationSettings,
    APIDocSettings,
    AppSettings,
    LoggingSettings,
):
    """All settings groups of the library API."""


settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
