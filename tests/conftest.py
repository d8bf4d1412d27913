"""Shared pytest configuration for the expense tracker test-suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


def _insert_repo_root() -> None:
    """Make the repository root importable when the package is not installed."""

    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_insert_repo_root()

from expense_tracker.database import Database  # noqa: E402
from expense_tracker.repository import TransactionRepository  # noqa: E402
from expense_tracker.server import create_app  # noqa: E402


def pytest_report_header(config: pytest.Config) -> Iterable[str]:  # pragma: no cover - pytest hook
    log_level = os.environ.get("EXPENSE_TRACKER_LOG_LEVEL", "INFO")
    return [f"expense-tracker repo: {Path.cwd()}", f"EXPENSE_TRACKER_LOG_LEVEL={log_level}"]


@pytest.fixture(autouse=True)
def _set_verbose_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO")
    monkeypatch.delenv("EXPENSE_TRACKER_JSON_LOGS", raising=False)


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def repository(database: Database) -> TransactionRepository:
    return TransactionRepository(database)


@pytest.fixture()
def client(repository: TransactionRepository) -> Iterator[TestClient]:
    app = create_app(repository=repository)
    with TestClient(app) as test_client:
        yield test_client
