"""
Logging with generation-target propagation.

Every record emitted while a type is being generated is tagged with the
type's name, so interleaved output from several definitions stays readable.
"""

import logging
import json
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any


# Context variable for the type currently being generated
_target: ContextVar[str | None] = ContextVar("generation_target", default=None)


def set_target(name: str | None) -> None:
    """Set generation target for current context."""
    _target.set(name or None)


def get_target() -> str | None:
    """Get generation target from current context."""
    return _target.get()


class TargetFilter(logging.Filter):
    """Adds target to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.target = get_target() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON for build logs.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "target": getattr(record, "target", None),
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals.
    """

    def format(self, record: logging.LogRecord) -> str:
        target = getattr(record, "target", "-")

        base = f"{record.levelname:<7} [{target}] {record.name}: {record.getMessage()}"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: Any = None,
) -> None:
    """
    Configure enumvariants logging.

    Args:
        level: Logging level
        json_format: Use JSON format (for CI logs)
        stream: Output stream (default: stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(TargetFilter())

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ReadableFormatter())

    root_logger = logging.getLogger("enumvariants")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for an enumvariants component."""
    return logging.getLogger(f"enumvariants.{name}")


class LogContext:
    """
    Context manager tagging log records with a generation target.

    Usage:
        with LogContext("Weekday"):
            logger.info("Resolving...")  # Includes target
    """

    def __init__(self, target: str | None):
        self.target = target
        self._token = None

    def __enter__(self):
        self._token = _target.set(self.target or None)
        return self

    def __exit__(self, *args):
        if self._token is not None:
            _target.reset(self._token)
