"""Logger factory.

Modules obtain loggers through get_logger(). The root logger is configured
from the application settings the first time any logger is requested, so
importing a module is enough to get working output.
"""

import logging
import sys
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import get_configured_logger, setup_logging_configuration

_configured = False
_lock = Lock()

AnyLogger = Union[logging.Logger, logging.LoggerAdapter]


def get_logger(name: Optional[str] = None, **extra_context) -> AnyLogger:
    """Return a logger, configuring logging on first use.

    Args:
        name: Logger name; defaults to the caller's module name
        **extra_context: Fields added to every record of the returned logger

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Book created", extra={"book_id": 7})

        borrow_logger = get_logger(component="borrow")
        ```
    """
    if not _configured:
        configure_logging()

    logger = get_configured_logger(name or _caller_module())
    if extra_context:
        return logging.LoggerAdapter(logger, extra_context)
    return logger


def configure_logging() -> None:
    """Configure logging now instead of on the first get_logger() call.

    Safe to call more than once; only the first call has an effect.
    """
    global _configured

    with _lock:
        if _configured:
            return
        setup_logging_configuration()
        _configured = True

    settings = get_settings()
    logging.getLogger(__name__).info(
        f"Logging configured for {settings.ENVIRONMENT.value} environment",
        extra={
            "log_level": settings.LOG_LEVEL,
            "log_format": settings.LOG_FORMAT,
            "file_enabled": settings.LOG_FILE_ENABLED,
        },
    )


def _caller_module() -> str:
    # Frame 0 is this function, 1 is get_logger, 2 is its caller.
    return str(sys._getframe(2).f_globals.get("__name__", "unknown"))
