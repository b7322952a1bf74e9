# /tms/config.py

"""
Process-wide settings, read once from environment variables.

Values in a local `.env` file are picked up too, but never override variables
already set in the process. Local development needs no configuration at all:
every value has a default that points at a SQLite file in the working directory.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

# Upper bound of any `limit` query parameter; the configured default must fit it.
MAX_ACTIVITY_LIMIT = 100


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./tms.db"
    log_level: str = "INFO"
    log_format: str = "console"
    default_activity_limit: int = 10
    activity_feed_overfetch: bool = False
    cors_allow_origins: Tuple[str, ...] = ("*",)


def _activity_limit(raw: str) -> int:
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"DEFAULT_ACTIVITY_LIMIT must be an integer, got {raw!r}")
    if not 1 <= limit <= MAX_ACTIVITY_LIMIT:
        raise ValueError(f"DEFAULT_ACTIVITY_LIMIT must be between 1 and {MAX_ACTIVITY_LIMIT}, got {limit}")
    return limit


def load_settings() -> Settings:
    """
    Builds a fresh Settings object from the current environment (and `.env`,
    if present).

    Raises:
        ValueError: if DEFAULT_ACTIVITY_LIMIT is not an integer in 1..MAX_ACTIVITY_LIMIT.
    """
    load_dotenv()
    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./tms.db"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT", "console").lower(),
        default_activity_limit=_activity_limit(os.getenv("DEFAULT_ACTIVITY_LIMIT", "10")),
        activity_feed_overfetch=_env_bool("ACTIVITY_FEED_OVERFETCH"),
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor used by the app factory and FastAPI dependencies."""
    return load_settings()
