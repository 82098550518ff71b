"""Dialect-aware ``INSERT ... ON CONFLICT DO NOTHING`` construction."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


class UnsupportedBackendError(RuntimeError):
    """Raised when the bound database has no ON CONFLICT support we know of."""


def insert_ignoring_conflicts(session: Session, table: Table) -> Any:
    """Return an insert into ``table`` that skips rows violating a unique constraint.

    Args:
        session: Session whose bind decides the SQL dialect.
        table: Core table to insert into.

    Returns:
        A dialect-specific insert construct with ``on_conflict_do_nothing`` applied.
    """
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        return postgresql.insert(table).on_conflict_do_nothing()
    if dialect_name == "sqlite":
        return sqlite.insert(table).on_conflict_do_nothing()
    raise UnsupportedBackendError(f"ON CONFLICT inserts are not supported on {dialect_name!r}")
