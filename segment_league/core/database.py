"""Database configuration and session helpers."""

from __future__ import annotations

from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .config import DATA_DIR, DATABASE_URL


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str) -> Engine:
    """Create an engine for ``url``.

    In-memory SQLite URLs share a single connection so that every session
    sees the same database.
    """

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        new_engine = create_engine(url, **kwargs)
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
        return new_engine
    return create_engine(url)


def create_tables(target: Engine, reset: bool = False) -> None:
    """Create all registered tables, optionally dropping them first."""

    from .. import models  # noqa: F401 - ensure models are registered with SQLModel

    if reset:
        SQLModel.metadata.drop_all(target)
    SQLModel.metadata.create_all(target)


if DATABASE_URL.startswith("sqlite:///"):
    DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = make_engine(DATABASE_URL)


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["create_tables", "engine", "get_session", "make_engine"]
