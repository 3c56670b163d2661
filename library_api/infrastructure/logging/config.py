"""Environment-aware logging setup.

Each environment maps to a profile describing its console output:

- development / local: coloured, detailed lines, DEBUG when verbose
- staging: uncoloured lines in LOG_FORMAT
- production: JSON lines, WARNING and above when optimized

A rotating file handler is added in every environment except production
when LOG_FILE_ENABLED is set.
"""

import logging
from dataclasses import dataclass
from typing import List

from ..config.settings import EnvironmentOption, Settings, get_settings
from .context import attach_correlation_filter
from .handlers import (
    create_console_handler,
    create_file_handler,
    create_null_handler,
)

# Third-party loggers that are too chatty outside development.
NOISY_LOGGERS = (
    "asyncpg",
    "aiosqlite",
    "sqlalchemy.engine",
    "sqlalchemy.dialects",
    "sqlalchemy.pool",
    "uvicorn.access",
)


@dataclass(frozen=True)
class LoggingProfile:
    console_format: str
    console_level: int
    use_colors: bool
    file_allowed: bool
    quiet_third_party: bool


def _profile_for(settings: Settings) -> LoggingProfile:
    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        return LoggingProfile(
            console_format="json",
            console_level=logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT,
            use_colors=False,
            file_allowed=False,
            quiet_third_party=True,
        )
    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        return LoggingProfile(
            console_format=settings.LOG_FORMAT,
            console_level=settings.LOG_LEVEL_INT,
            use_colors=False,
            file_allowed=True,
            quiet_third_party=False,
        )
    return LoggingProfile(
        console_format="detailed",
        console_level=logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT,
        use_colors=True,
        file_allowed=True,
        quiet_third_party=False,
    )


def _build_handlers(settings: Settings, profile: LoggingProfile) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        handlers.append(
            create_console_handler(
                format_type=profile.console_format,
                level=profile.console_level,
                use_colors=profile.use_colors,
            )
        )

    if settings.LOG_FILE_ENABLED and profile.file_allowed:
        handlers.append(
            create_file_handler(
                filepath=settings.LOG_FILE_PATH,
                format_type="structured",
                level=logging.DEBUG,
                max_bytes=settings.LOG_FILE_MAX_SIZE,
                backup_count=settings.LOG_FILE_BACKUP_COUNT,
            )
        )

    return handlers


def setup_logging_configuration() -> None:
    """Replace the root logger's handlers according to the current settings.

    Called once, lazily, by the logger factory.
    """
    settings = get_settings()
    profile = _profile_for(settings)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in _build_handlers(settings, profile):
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.LOG_CORRELATION_ID:
        attach_correlation_filter(root_logger.handlers)

    if profile.quiet_third_party:
        _set_levels(NOISY_LOGGERS, logging.WARNING)


def configure_testing_logging() -> None:
    """Silence everything below ERROR and drop output entirely.

    Used from the test suite in place of the environment setup.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(create_null_handler())
    root_logger.setLevel(logging.ERROR)

    _set_levels(("sqlalchemy.engine", "aiosqlite", "asyncpg"), logging.ERROR)


def _set_levels(logger_names, level: int) -> None:
    for name in logger_names:
        logging.getLogger(name).setLevel(level)


def get_configured_logger(name: str) -> logging.Logger:
    """Return the named logger; it inherits the root configuration."""
    return logging.getLogger(name)
