"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from exposure_store.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import exposure_store.models  # noqa: E402,F401


def use_immediate_transactions(engine: Engine) -> Engine:
    """Make every SQLite transaction take the write lock when it begins.

    pysqlite defers BEGIN until the first write, so two submissions for the
    same verification id could both start reading before either writes.
    ``BEGIN IMMEDIATE`` serializes writers up front and lets them wait on
    the busy timeout instead of failing with a lock upgrade error.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = create_engine(
    settings.database_url_sync,
    pool_pre_ping=True,
    echo=settings.sql_debug,
)
if engine.dialect.name == "sqlite":
    use_immediate_transactions(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session on the configured engine and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
