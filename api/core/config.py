"""
Runtime settings read from the environment.

Settings are loaded once at startup and handed to the components that need
them (see `api/main.py`). Nothing here is process-wide mutable state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .errors import ConfigError

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def sanitize_database_url(url: str) -> str:
    """
    Drop `sslmode` from the DSN query string; asyncpg does not accept it.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_min_size: int = 1
    pool_max_size: int = 5
    command_timeout_s: float = 30.0
    create_schema: bool = True
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)


def cors_origins() -> tuple[str, ...]:
    return _env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)


def load_settings() -> Settings:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise ConfigError("DATABASE_URL is not set.")

    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), min_size, 1)
    timeout_s = _env_int("DB_COMMAND_TIMEOUT_S", 30)
    if timeout_s <= 0:
        timeout_s = 30

    return Settings(
        database_url=sanitize_database_url(url),
        pool_min_size=min_size,
        pool_max_size=max_size,
        command_timeout_s=float(timeout_s),
        create_schema=_env_bool("DB_CREATE_SCHEMA", True),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        cors_origins=cors_origins(),
    )
