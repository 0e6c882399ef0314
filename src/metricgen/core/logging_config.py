"""Logging configuration with automatic run-context injection.

Log records emitted during a compilation run carry the run ID, the source
document and the elapsed time (see metricgen.core.context). Logs always go
to stderr; stdout is reserved for compiler output.

Usage:
    from metricgen.core.logging_config import configure_logging, get_logger

    configure_logging(level="DEBUG", format="human")
    logger = get_logger(__name__)
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Union

from metricgen.core.context import get_run_id, get_source, get_start_time

__all__ = [
    "ContextFilter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
    "get_logger",
]

ROOT_LOGGER = "metricgen"


class ContextFilter(logging.Filter):
    """Logging filter that injects run context into log records.

    Adds run_id, source and elapsed_ms to every record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id() or "-"
        record.source = get_source() or "-"

        start_time = get_start_time()
        if start_time > 0:
            record.elapsed_ms = round((time.time() - start_time) * 1000, 2)
        else:
            record.elapsed_ms = 0.0

        return True


class StructuredFormatter(logging.Formatter):
    """JSON-structured log formatter, one object per line.

    Example output:
        {"timestamp":"2024-01-15T10:30:45.123+00:00","level":"INFO",
         "logger":"metricgen.core.compiler","message":"Catalog loaded",
         "run_id":"run_a1b2c3d4e5f6","source":"metrics.yaml","elapsed_ms":4.2}
    """

    # Attributes every LogRecord has; anything else came in through `extra`
    _STANDARD_ATTRS = frozenset(
        {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "message",
            "exc_info",
            "exc_text",
            "stack_info",
            "taskName",
            "run_id",
            "source",
            "elapsed_ms",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": getattr(record, "run_id", "-"),
            "source": getattr(record, "source", "-"),
            "elapsed_ms": getattr(record, "elapsed_ms", 0.0),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {}
        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS:
                continue
            try:
                json.dumps(value)
                extra[key] = value
            except (TypeError, ValueError):
                extra[key] = str(value)
        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter with context prefix.

    Produces logs in format:
        [LEVEL] [run_id] logger: message

    Example:
        [INFO] [run_a1b2c3] core.compiler: Catalog loaded: 2 categories, 5 metrics
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [f"[{record.levelname}]"]

        run_id = getattr(record, "run_id", "-")
        if run_id and run_id != "-":
            parts.append(f"[{run_id}]")

        logger_name = record.name
        if logger_name.startswith(ROOT_LOGGER + "."):
            logger_name = logger_name[len(ROOT_LOGGER) + 1 :]
        parts.append(f"{logger_name}:")

        parts.append(record.getMessage())

        result = " ".join(parts)
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def configure_logging(
    *,
    level: Union[int, str] = logging.WARNING,
    format: str = "human",  # "structured" or "human"
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the root metricgen logger.

    Existing handlers on the metricgen logger are replaced, so calling this
    twice does not duplicate output.

    Args:
        level: Log level name or number (default: WARNING)
        format: "structured" for JSON lines, "human" for readable lines
        stream: Output stream (default: stderr)

    Returns:
        The configured metricgen logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    if format == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter())
    handler.addFilter(ContextFilter())

    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the metricgen namespace.

    Args:
        name: Logger name (typically __name__)
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
