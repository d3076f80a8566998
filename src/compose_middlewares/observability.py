"""Opt-in logging setup: JSON or text output for the package loggers.

The library never touches logging configuration on import; applications that
want the trace output call setup_logging() once at startup.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from . import config

PACKAGE_LOGGER = "compose_middlewares"


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("run_id", "position", "middleware"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Attach a stream handler to the package logger and return it."""
    level = level or config.LOG_LEVEL
    fmt = fmt or config.LOG_FORMAT

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return handler
