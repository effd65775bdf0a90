"""
Logging utilities for the connector framework.

Provides JSON or human-readable output for the ``datalink`` package logger
and a ``logged`` decorator for tracing connector calls.
"""

import functools
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Callable, Optional


CONTEXT_FIELDS = ("connector", "operation", "page")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs JSON-structured log lines.

    Each log line includes:
    - Standard log fields (timestamp, level, message, logger)
    - Context fields if present (connector, operation, page)
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_timestamp:
            log_entry["timestamp"] = datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat()

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter that outputs human-readable log lines with context.

    Format: TIMESTAMP - LOGGER - LEVEL - MESSAGE [connector=X operation=Y]
    """

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(name)s - %(levelname)s - %(message)s"
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        context_parts = []
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")

        if context_parts:
            return f"{base} [{' '.join(context_parts)}]"
        return base


def configure_logging(
    level: int = logging.INFO,
    structured: bool = False,
    include_timestamp: bool = True,
    stream: Any = None,
) -> logging.Logger:
    """
    Configure the ``datalink`` package logger.

    Handlers are only added once, so repeated calls just adjust the level.

    Args:
        level: Logging level (default: INFO)
        structured: If True, output JSON lines; otherwise human-readable
        include_timestamp: Whether to include timestamps
        stream: Output stream (default: stderr, keeping stdout for results)

    Returns:
        The package logger
    """
    package_logger = logging.getLogger("datalink")
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        if structured:
            formatter = StructuredFormatter(include_timestamp=include_timestamp)
        else:
            formatter = HumanReadableFormatter(include_timestamp=include_timestamp)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)

    return package_logger


def logged(name: str, logger: Optional[logging.Logger] = None) -> Callable:
    """
    Decorator logging each call and its result at DEBUG level.

    Example:
        >>> @logged("getSchema")
        ... def get_schema(self, request): ...
    """
    log = logger or logging.getLogger("datalink.calls")

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not log.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            log.debug(
                f"Calling {name} with arguments: {args!r} {kwargs!r}",
                extra={"operation": name},
            )
            result = func(*args, **kwargs)
            log.debug(f"{name} returned: {result!r}", extra={"operation": name})
            return result
        return wrapper

    return decorator
