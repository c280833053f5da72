"""Database engine/session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def create_db_engine(db_url: str, *, echo_sql: bool = False) -> Engine:
    """Create an engine for the match store.

    SQLite URLs (local exports, tests) skip pre-ping; an in-memory SQLite
    database is pinned to one shared connection so every session sees it.
    """
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True, echo=echo_sql, future=True)

    if url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo_sql,
            future=True,
        )
    return create_engine(url, connect_args={"check_same_thread": False}, echo=echo_sql, future=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Read-oriented sessions: no autoflush, objects stay usable after commit."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
