"""
Central logging configuration.
Creates console and optional file handlers with support for TRACE/INFO/WARNING/ERROR levels.
"""
from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from catalog_admin.core.config import Settings, settings

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self: logging.Logger, message: str, *args, **kwargs) -> None:
    """Emit a TRACE-level message on the logger instance."""
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace  # type: ignore[attr-defined]


class LogLevelFilter(logging.Filter):
    """Filter log records to an allowed set of levels."""

    def __init__(self, allowed_levels: set[int]) -> None:
        """Initialize the filter with the accepted level numbers."""
        super().__init__()
        self._allowed_levels = allowed_levels

    def filter(self, record: logging.LogRecord) -> bool:
        """Return True when the record level is allowed."""
        return record.levelno in self._allowed_levels


_LEVEL_NAMES = {
    "TRACE": TRACE_LEVEL,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _parse_allowed_levels(raw: Optional[str]) -> set[int]:
    """Parse a comma separated list of level names into numeric values."""
    default_levels = set(_LEVEL_NAMES.values())
    if not raw:
        return default_levels

    levels: set[int] = set()
    for level_name in raw.split(","):
        level = _LEVEL_NAMES.get(level_name.strip().upper())
        if level is not None:
            levels.add(level)
    return levels or default_levels


def _resolve_level(level_name: Optional[str]) -> int:
    """Resolve the configured log level string to its numeric value."""
    if not level_name:
        return logging.INFO
    normalized = level_name.strip().upper()
    if normalized == "TRACE":
        return TRACE_LEVEL
    return getattr(logging, normalized, logging.INFO)


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logger with a console handler and, if configured, a file handler."""
    config = config or settings
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(config.LOG_LEVEL))
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    level_filter = LogLevelFilter(_parse_allowed_levels(config.LOG_LEVELS))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(level_filter)
    root_logger.addHandler(console_handler)

    if config.LOG_FILE_PATH:
        log_dir = os.path.dirname(config.LOG_FILE_PATH)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(config.LOG_FILE_PATH)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(level_filter)
        root_logger.addHandler(file_handler)


def log_api_timing(func: F) -> F:
    """
    Decorator to log the execution time of backend API calls.
    Logs the qualified name, the positional arguments after 'self'
    and the duration in milliseconds. Failures are logged and re-raised.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)

        arg_parts = [str(arg) for arg in args[1:]]
        for key, value in kwargs.items():
            arg_parts.append(f"{key}={value}")
        args_str = ", ".join(arg_parts)

        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "API_OP | %s | duration=%.3fms | args=(%s) | error=%s",
                func.__qualname__,
                elapsed_ms,
                args_str,
                str(e),
            )
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "API_OP | %s | duration=%.3fms | args=(%s)",
            func.__qualname__,
            elapsed_ms,
            args_str,
        )
        return result
    return wrapper  # type: ignore[return-value]
