"""
Environment-driven settings.

Every value is read on call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq-only query params such as sslmode.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def db_pool_min_size() -> int:
    # asyncpg rejects min_size > max_size.
    return min(max(_env_int("DB_POOL_MIN_SIZE", 1), 0), db_pool_max_size())


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 10), 1)


def db_command_timeout() -> float:
    """
    Per-statement deadline in seconds.
    """
    value = _env_float("DB_COMMAND_TIMEOUT", 30.0)
    return value if value > 0 else 30.0


def log_level() -> str:
    level = os.environ.get("LOG_LEVEL", "").strip().upper()
    if not level or not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
