"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

import importlib
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from reparto.core.config import get_settings

Base = declarative_base()


def sqlite_available() -> bool:
    """True when the native sqlite3 driver can be loaded in this interpreter."""
    try:
        importlib.import_module("sqlite3")
    except ImportError:
        return False
    return True


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def make_engine(url: str) -> Engine:
    """Create an engine; SQLite connections get a casefold() SQL function."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _register_functions(dbapi_connection, _record):
            dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)
    return engine


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return make_engine(url)


def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
