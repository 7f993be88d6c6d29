"""
Environment-driven settings.

Every setting is read on demand so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PORT = 5000
DEFAULT_CORS_ORIGIN_REGEX = r"http://localhost.*"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"


def cors_origin_regex() -> str:
    """
    Origins matching this pattern are allowed. Defaults to any localhost origin
    (any port, any path suffix).
    """
    return os.environ.get("CORS_ORIGIN_REGEX", DEFAULT_CORS_ORIGIN_REGEX).strip() or DEFAULT_CORS_ORIGIN_REGEX


def cors_allowed_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOWED_ORIGINS", "")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def uploads_dir() -> Path:
    raw = os.environ.get("UPLOADS_DIR", "").strip()
    if raw:
        return Path(raw)
    return Path(__file__).resolve().parent.parent / "uploads"


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 10))
