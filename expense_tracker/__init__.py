"""Expense tracking REST API backed by a relational transaction store."""

from __future__ import annotations

__all__ = [
    "__version__",
    "cli",
    "client",
    "config",
    "database",
    "errors",
    "logging",
    "models",
    "repository",
    "schemas",
    "server",
    "summary",
]

__version__ = "1.0.0"
