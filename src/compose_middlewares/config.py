"""Load settings from environment (.env and env vars)."""

from __future__ import annotations

import os
from pathlib import Path

# Load .env from project root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


def _bool(key: str) -> bool:
    return _str(key).lower() in ("1", "true", "yes", "on")


# Logging
LOG_LEVEL = _str("COMPOSE_MIDDLEWARES_LOG_LEVEL") or "WARNING"
LOG_FORMAT = _str("COMPOSE_MIDDLEWARES_LOG_FORMAT") or "text"


def trace_enabled() -> bool:
    """Per-dispatch debug logging; read on every run so it can be toggled live."""
    return _bool("COMPOSE_MIDDLEWARES_TRACE")
