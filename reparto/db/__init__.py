"""Database helpers (engine/session export)."""

from .session import Base, get_engine, make_engine, make_sessionmaker, sqlite_available

__all__ = ["Base", "get_engine", "make_engine", "make_sessionmaker", "sqlite_available"]
