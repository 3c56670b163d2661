"""Centralized logging infrastructure for the library API.

Usage:
    ```python
    from library_api.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Book borrowed", extra={"book_id": 1, "user_id": 2})
    ```

Log records carry the correlation id of the request being served; the
request middleware sets it from the X-Request-ID header or generates one.
"""

from .config import configure_testing_logging, setup_logging_configuration
from .context import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
]
