"""Centralized configuration for the content backfill scraper.

This module reads environment variables (optionally from a .env file) and
exposes simple constants and a small helper to access configuration values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

# If a .env file is present, load it without overriding the real environment.
_env_path = Path(".") / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=str(_env_path))

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _sqlite_url(directory: str, name: str) -> str:
    """Build a SQLite URL from a directory and a database file name."""
    return f"sqlite:///{Path(directory) / name}"


# Runtime / deployment context
APP_ENV: str = os.getenv("APP_ENV", os.getenv("ENVIRONMENT", "local"))


# Database location. Resolution order:
# 1. DATABASE_URL
# 2. PATH_DATABASE + NAME_DB (SQLite file supplied by the hosting environment)
# 3. DATABASE_HOST / DATABASE_NAME / DATABASE_USER (server database)
# 4. local SQLite fallback
PATH_DATABASE: Optional[str] = os.getenv("PATH_DATABASE")
NAME_DB: Optional[str] = os.getenv("NAME_DB")

DATABASE_ENGINE: str = os.getenv("DATABASE_ENGINE", "postgresql+psycopg2")
DATABASE_HOST: Optional[str] = os.getenv("DATABASE_HOST")
DATABASE_PORT: Optional[str] = os.getenv("DATABASE_PORT", "5432")
DATABASE_NAME: Optional[str] = os.getenv("DATABASE_NAME")
DATABASE_USER: Optional[str] = os.getenv("DATABASE_USER")
DATABASE_PASSWORD: Optional[str] = os.getenv("DATABASE_PASSWORD")

_database_url = os.getenv("DATABASE_URL")

if not _database_url and PATH_DATABASE and NAME_DB:
    _database_url = _sqlite_url(PATH_DATABASE, NAME_DB)

if not _database_url and all([DATABASE_HOST, DATABASE_NAME, DATABASE_USER]):
    auth_segment = quote_plus(DATABASE_USER or "")
    if DATABASE_PASSWORD:
        auth_segment += f":{quote_plus(DATABASE_PASSWORD)}"
    port_segment = f":{DATABASE_PORT}" if DATABASE_PORT else ""
    _database_url = (
        f"{DATABASE_ENGINE}://{auth_segment}@{DATABASE_HOST}{port_segment}/"
        f"{DATABASE_NAME}"
    )

DATABASE_URL: str = _database_url or "sqlite:///data/newsnexus.db"


# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text").strip().lower() or "text"
LOG_FILE: Optional[str] = os.getenv("LOG_FILE") or None

# Scraper behaviour
SCRAPE_DELAY: float = _env_float("SCRAPE_DELAY", 1.0)
LIGHTWEIGHT_TIMEOUT: int = _env_int("LIGHTWEIGHT_TIMEOUT", 15)
ROBUST_TIMEOUT: int = _env_int("ROBUST_TIMEOUT", 30)
SCRAPER_USER_AGENT: str = os.getenv("SCRAPER_USER_AGENT") or DEFAULT_USER_AGENT


def get_config() -> Dict[str, Any]:
    """Return a dict of the most important configuration values.

    Useful for logging the effective settings at startup and in tests.
    """
    return {
        "runtime": {"environment": APP_ENV},
        "database_url": DATABASE_URL,
        "database": {
            "path": PATH_DATABASE,
            "name": NAME_DB,
            "engine": DATABASE_ENGINE,
            "host": DATABASE_HOST,
            "port": DATABASE_PORT,
            "user": DATABASE_USER,
        },
        "log_level": LOG_LEVEL,
        "log_format": LOG_FORMAT,
        "scraper": {
            "delay": SCRAPE_DELAY,
            "lightweight_timeout": LIGHTWEIGHT_TIMEOUT,
            "robust_timeout": ROBUST_TIMEOUT,
            "user_agent": SCRAPER_USER_AGENT,
        },
    }
