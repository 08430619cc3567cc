"""Utility helpers for loading project configuration.

This module is the single source of truth for environment-driven
configuration such as database connection details and log level.

Usage:
- Call ``load_env_file()`` once at startup to load ``resources/.env``.
- Use ``get_env`` for simple lookups.
- Use ``get_database_url`` and ``configure_logging`` for normalized access.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s %(message)s"


def load_env_file(env_path: Optional[Path] = None) -> None:
    """
    Load environment variables from an .env file.

    Parameters:
        env_path: Optional path to the .env file. Defaults to resources/.env.
    """
    env_file = Path(env_path) if env_path else Path("resources/.env")
    if env_file.exists():
        load_dotenv(env_file)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Fetch an environment variable with an optional default."""
    return os.getenv(name, default)


# ----- Database helpers -----

def get_database_url() -> Optional[str]:
    """Return a database URL.

    Prefers ``DATABASE_URL`` if present (any SQLAlchemy URL, e.g. a
    ``sqlite:///runs.db`` file); otherwise constructs a PostgreSQL DSN from:
    - DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD
    """
    db_url = get_env("DATABASE_URL")
    if db_url:
        return db_url

    host = get_env("DB_HOST")
    port = get_env("DB_PORT") or "5432"
    name = get_env("DB_NAME")
    user = get_env("DB_USER")
    password = get_env("DB_PASSWORD")

    if not (host and name and user and password):
        return None

    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"


# ----- Logging helpers -----

def get_log_level() -> int:
    """Return the numeric log level from ``LOG_LEVEL`` (default INFO)."""
    name = (get_env("LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """Install a single stream handler on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level if level is not None else get_log_level())
    if not any(getattr(h, "_etl_handler", False) for h in root.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(LOG_FORMAT))
        stream._etl_handler = True  # type: ignore[attr-defined]
        root.addHandler(stream)
    return root
