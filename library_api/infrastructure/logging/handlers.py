"""Console and file handlers used by the logging setup."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TextIO

from .formatters import get_formatter

# ANSI colour codes by level number.
LEVEL_COLORS = {
    logging.DEBUG: "36",
    logging.INFO: "32",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "35",
}


def _supports_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return sys.platform != "win32" and callable(isatty) and isatty()


class ColoredConsoleHandler(logging.StreamHandler):
    """Stream handler that highlights the level name on interactive terminals."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream or sys.stdout)
        self.use_colors = _supports_color(self.stream)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        code = LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or code is None:
            return text
        return text.replace(record.levelname, f"\033[{code}m{record.levelname}\033[0m", 1)


def _prepare(handler: logging.Handler, format_type: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(get_formatter(format_type))
    return handler


def create_console_handler(
    format_type: str = "detailed", level: int = logging.INFO, use_colors: bool = True
) -> logging.Handler:
    """Create a handler writing to stdout.

    Args:
        format_type: Formatter name, see get_formatter()
        level: Minimum level the handler emits
        use_colors: Colour level names when stdout is a terminal
    """
    handler = ColoredConsoleHandler() if use_colors else logging.StreamHandler(sys.stdout)
    return _prepare(handler, format_type, level)


def create_file_handler(
    filepath: str,
    format_type: str = "structured",
    level: int = logging.DEBUG,
    max_bytes: int = 10485760,
    backup_count: int = 5,
) -> logging.Handler:
    """Create a size-rotated file handler, creating the log directory if needed.

    Args:
        filepath: Path of the active log file
        format_type: Formatter name, see get_formatter()
        level: Minimum level the handler emits
        max_bytes: Size at which the file is rotated
        backup_count: Number of rotated files kept
    """
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filepath, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    return _prepare(handler, format_type, level)


def create_null_handler() -> logging.Handler:
    """Create a handler that discards all log records."""
    return logging.NullHandler()
