"""Structured logging utilities for the Vangmaya API."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """Simple JSON formatter emitting structured log lines."""

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        """Format the log record as a JSON payload."""

        base: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self._service_name:
            base["service"] = self._service_name

        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)

        # Anything passed through ``extra=`` lands under "extra"
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_ATTRS:
                continue
            base.setdefault("extra", {})[key] = value

        return json.dumps(base, default=_json_default)


def _json_default(value: Any) -> Any:
    """Fallback JSON serializer for unsupported types."""

    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def configure_logging(level: str = "INFO", service_name: str | None = None) -> None:
    """Configure application-wide structured logging."""

    logging_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(service_name=service_name))

    logging.basicConfig(level=logging_level, handlers=[handler], force=True)


def get_logger(name: str = "vangmaya") -> logging.Logger:
    """Return a structured logger instance."""

    return logging.getLogger(name)
