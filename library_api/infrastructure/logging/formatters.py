"""Log formatters selected by name through get_formatter().

- simple: ``[LEVEL] logger: message``
- detailed: timestamp, level, logger and correlation id, then any extras
- structured: one line of key=value pairs
- json: one JSON object per line
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Type

# Attributes set on every LogRecord; anything else arrived through `extra`.
STANDARD_RECORD_ATTRIBUTES = frozenset(logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
    "correlation_id",
}


def extract_extra(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the fields passed to the logging call through `extra`."""
    return {key: value for key, value in record.__dict__.items() if key not in STANDARD_RECORD_ATTRIBUTES}


def record_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


def _render_value(value: Any) -> str:
    if isinstance(value, (bool, int, float)) or value is None:
        return str(value)
    return '"' + str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n") + '"'


class SimpleFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(fmt="[%(levelname)s] %(name)s: %(message)s")


class DetailedFormatter(logging.Formatter):
    """Human-oriented line for development consoles.

    Example:
        2026-01-01 10:00:00 [    INFO] library_api.modules.book_borrow.services (3f2a...): Book borrowed book_id=1 user_id=2
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s (%(correlation_id)s): %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        record.__dict__.setdefault("correlation_id", "no-correlation")
        line = super().format(record)
        extra = extract_extra(record)
        if not extra:
            return line

        first_line, newline, rest = line.partition("\n")
        suffix = " ".join(f"{key}={_render_value(value)}" for key, value in extra.items())
        return f"{first_line} {suffix}{newline}{rest}"


class StructuredFormatter(logging.Formatter):
    """key=value line that both people and log shippers can read."""

    def format(self, record: logging.LogRecord) -> str:
        fields: Dict[str, Any] = {
            "timestamp": record_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", "no-correlation"),
            "message": record.getMessage(),
        }
        fields.update(extract_extra(record))
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{key}={_render_value(value)}" for key, value in fields.items())


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": record_timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None),
            "location": f"{record.pathname}:{record.lineno}",
            "function": record.funcName,
        }
        payload.update(extract_extra(record))

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


FORMATTERS: Dict[str, Type[logging.Formatter]] = {
    "simple": SimpleFormatter,
    "detailed": DetailedFormatter,
    "structured": StructuredFormatter,
    "json": JSONFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """Instantiate the formatter registered under `format_type`.

    Raises:
        ValueError: The name is not one of FORMATTERS
    """
    try:
        return FORMATTERS[format_type.lower()]()
    except KeyError:
        raise ValueError(f"Unknown format type: {format_type}. Available: {', '.join(FORMATTERS)}") from None
