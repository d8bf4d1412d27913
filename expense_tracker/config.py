"""Runtime settings resolved from ``EXPENSE_TRACKER_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

ENV_PREFIX: Final[str] = "EXPENSE_TRACKER_"
DEFAULT_DB_PATH: Final[str] = "expense_tracker.db"
DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 3000
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = False


def sqlite_url(path: str | Path) -> str:
    """Build a SQLAlchemy URL for a SQLite file."""

    return f"sqlite:///{Path(path)}"


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(ENV_PREFIX + name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    ``EXPENSE_TRACKER_DATABASE_URL`` wins over ``EXPENSE_TRACKER_DB_PATH``.
    A malformed ``EXPENSE_TRACKER_PORT`` raises :class:`ValueError`.
    """

    env = os.environ if environ is None else environ

    database_url = _env(env, "DATABASE_URL") or sqlite_url(_env(env, "DB_PATH") or DEFAULT_DB_PATH)

    raw_port = _env(env, "PORT")
    try:
        port = int(raw_port) if raw_port is not None else DEFAULT_PORT
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}PORT must be an integer, got {raw_port!r}") from exc

    json_logs = (_env(env, "JSON_LOGS") or "").lower() in _TRUTHY

    return Settings(
        database_url=database_url,
        host=_env(env, "HOST") or DEFAULT_HOST,
        port=port,
        log_level=(_env(env, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        json_logs=json_logs,
    )


__all__ = ["Settings", "load_settings", "sqlite_url"]
