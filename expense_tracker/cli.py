"""Command-line entry point for the expense tracker."""

from __future__ import annotations

import argparse
import json
from collections.abc import Sequence
from dataclasses import replace

import uvicorn

from . import __version__
from .config import Settings, load_settings, sqlite_url
from .database import Database
from .logging import configure_logging, get_logger
from .repository import TransactionRepository
from .server import create_app
from .summary import compute_summary

DESCRIPTION = "Personal expense tracking API"
LOG = get_logger(__name__)


def _add_db_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--db", help="SQLite file path (overrides EXPENSE_TRACKER_DB_PATH)")
    parser.add_argument("--database-url", help="SQLAlchemy database URL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-tracker", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    _add_db_argument(serve)
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Bind port")
    serve.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    serve.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    init_db = sub.add_parser("init-db", help="Create the database tables")
    _add_db_argument(init_db)

    summary = sub.add_parser("summary", help="Print income/expense totals")
    _add_db_argument(summary)
    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    if getattr(args, "database_url", None):
        settings = replace(settings, database_url=args.database_url)
    elif getattr(args, "db", None):
        settings = replace(settings, database_url=sqlite_url(args.db))
    if getattr(args, "host", None):
        settings = replace(settings, host=args.host)
    if getattr(args, "port", None) is not None:
        settings = replace(settings, port=args.port)
    if getattr(args, "log_level", None):
        settings = replace(settings, log_level=args.log_level.upper())
    if getattr(args, "json_logs", False):
        settings = replace(settings, json_logs=True)
    return settings


def _serve(settings: Settings) -> int:
    app = create_app(settings=settings)
    LOG.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def _init_db(settings: Settings) -> int:
    database = Database(settings.database_url)
    try:
        database.create_all()
    finally:
        database.dispose()
    print(f"[expense-tracker] initialised {settings.database_url}")
    return 0


def _summary(settings: Settings) -> int:
    database = Database(settings.database_url)
    try:
        database.create_all()
        summary = compute_summary(TransactionRepository(database))
    finally:
        database.dispose()
    print(json.dumps(summary.model_dump(by_alias=True)))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = _resolve_settings(args)
    configure_logging(json_logs=settings.json_logs, level=settings.log_level)

    if args.command == "serve":
        return _serve(settings)
    if args.command == "init-db":
        return _init_db(settings)
    if args.command == "summary":
        return _summary(settings)
    parser.error(f"Unknown command {args.command!r}")
    return 2


__all__ = ["build_parser", "main"]
