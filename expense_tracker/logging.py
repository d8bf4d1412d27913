"""Logging helpers shared by the expense tracker modules.

Every logger gets a single console handler; ``EXPENSE_TRACKER_LOG_LEVEL``
overrides the requested level and ``EXPENSE_TRACKER_JSON_LOGS`` switches the
handler to one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import Final

CONSOLE_FORMAT: Final[str] = "[%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL: Final[str] = "INFO"
LEVEL_ENV_FLAG: Final[str] = "EXPENSE_TRACKER_LOG_LEVEL"
JSON_ENV_FLAG: Final[str] = "EXPENSE_TRACKER_JSON_LOGS"
ROOT_LOGGER: Final[str] = "expense_tracker"


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "source": record.name,
            "message": record.getMessage(),
        }
        transaction_id = getattr(record, "transaction_id", None)
        if transaction_id is not None:
            payload["transaction_id"] = transaction_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _resolve_level(level: str | int | None) -> int:
    env_level = os.environ.get(LEVEL_ENV_FLAG)
    if env_level and env_level.strip():
        candidate = env_level.strip().upper()
    elif isinstance(level, str):
        candidate = level.strip().upper()
    elif isinstance(level, int):
        return int(level)
    else:
        candidate = DEFAULT_LEVEL
    resolved = logging.getLevelName(candidate)
    return int(resolved) if isinstance(resolved, int) else logging.INFO


def _json_logging_enabled(explicit: bool) -> bool:
    if explicit:
        return True
    value = os.environ.get(JSON_ENV_FLAG)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _ensure_console_handler(logger: logging.Logger, level: int, json_format: bool) -> None:
    formatter: logging.Formatter = JsonFormatter() if json_format else logging.Formatter(CONSOLE_FORMAT)
    for handler in logger.handlers:
        if getattr(handler, "_expense_tracker_console", False):
            handler.setLevel(level)
            handler.setFormatter(formatter)
            return
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    stream_handler._expense_tracker_console = True  # type: ignore[attr-defined]
    logger.addHandler(stream_handler)


def setup_logger(
    name: str,
    json_format: bool = False,
    level: str | int | None = None,
) -> logging.Logger:
    """Configure and return a logger with the package console handler."""

    resolved_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(resolved_level)
    # Propagate so capture handlers such as pytest ``caplog`` still see records.
    logger.propagate = True
    _ensure_console_handler(logger, resolved_level, _json_logging_enabled(json_format))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger below the ``expense_tracker`` namespace.

    Library modules only acquire loggers; handlers live on the package root
    logger configured by :func:`configure_logging`.
    """

    return logging.getLogger(name)


def configure_logging(json_logs: bool = False, level: str | int | None = None) -> logging.Logger:
    """Configure the package root logger for server and CLI runs."""

    if json_logs:
        os.environ[JSON_ENV_FLAG] = "1"
    else:
        os.environ.pop(JSON_ENV_FLAG, None)
    return setup_logger(ROOT_LOGGER, json_format=json_logs, level=level)


__all__ = ["JsonFormatter", "configure_logging", "get_logger", "setup_logger"]
