"""JSON-line logging shared by the API and the command-line shell.

Each record carries the emitting `component` ("api" or "shell"). The API
logs to stdout; the shell logs to stderr so stdout stays free for the link.
setup_logging() is idempotent.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


class JsonFormatter(logging.Formatter):
    """Render a record and its `extra=` fields as one JSON object."""

    def __init__(self, component: str) -> None:
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "component": self.component,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (k, v) for k, v in record.__dict__.items() if k not in _RESERVED and k not in payload
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # LineRange models and similar extras are rendered with str().
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(
    level: str | int = _DEFAULT_LEVEL, *, component: str = "api", stream: TextIO | None = None
) -> None:
    """Attach a JSON handler to the root logger unless one is already present."""
    root = logging.getLogger()
    if root.handlers:  # tests and reloads configure once
        return

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter(component))
    root.setLevel(level)
    root.addHandler(handler)

    # The request middleware already logs every request.
    logging.getLogger("uvicorn.access").disabled = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``linker`` namespace, e.g. ``linker.service.links``."""
    return logging.getLogger(f"linker.{name}" if name else "linker")
