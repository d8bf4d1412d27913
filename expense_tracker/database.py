"""Database configuration for the expense tracker."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine, adapting SQLite connections for threaded use."""

    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True, future=True)

    kwargs: dict = {"connect_args": {"check_same_thread": False}, "future": True}
    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise each session sees an empty database.
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


class Database:
    """Owns the engine and session factory for one backing store.

    In-memory SQLite (``sqlite://``) shares a single connection between all
    sessions, so concurrent requests may interleave their commits and rollbacks.
    Use a file-backed database for anything served concurrently.
    """

    def __init__(self, database_url: str) -> None:
        self.url = database_url
        self.engine = build_engine(database_url)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            future=True,
        )

    def create_all(self) -> None:
        """Create database tables if they do not already exist."""
        from . import models  # noqa: F401  # Import models for metadata registration

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        from . import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"Database({make_url(self.url).render_as_string(hide_password=True)!r})"


__all__ = ["Base", "Database", "build_engine"]
