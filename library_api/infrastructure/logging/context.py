"""Request correlation ids for log records.

The request middleware stores an id per request in a context variable, and
CorrelationIdFilter copies it onto every record emitted while serving that
request.
"""

import contextvars
import logging
import uuid
from typing import Optional

NO_CORRELATION = "no-correlation"

correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """Bind a correlation id to the current context.

    Returns:
        Token to hand to reset_correlation_id() when the request is done
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the correlation id of the current request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION
        return True


def attach_correlation_filter(handlers: list[logging.Handler]) -> None:
    """Add a CorrelationIdFilter to each handler that lacks one.

    Handler filters also run for records propagated from child loggers,
    unlike filters on the root logger itself.
    """
    for handler in handlers:
        if not any(isinstance(existing, CorrelationIdFilter) for existing in handler.filters):
            handler.addFilter(CorrelationIdFilter())
