"""
Schema bootstrap for the clients/visits tables.

SQLRepository calls create_all() on startup so a fresh data.db is usable
right away; running this module creates the schema for DATABASE_URL.
"""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(engine: Engine | None = None) -> None:
    """Create missing tables on engine (defaults to the configured one); existing data is kept."""
    Base.metadata.create_all(bind=engine or get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
