"""
Persistence adapters.

Both repositories satisfy the same contract (see base.Repository). Which one
backs the API is decided once at startup by build_repository().
"""

from __future__ import annotations

import logging

from reparto.core.config import Settings, get_settings
from reparto.db.session import make_engine, sqlite_available
from reparto.domain.dates import Clock, utc_now

from .base import Repository
from .memory_repository import MemoryRepository, MemoryStore
from .sql_repository import SQLRepository

logger = logging.getLogger(__name__)

__all__ = ["Repository", "SQLRepository", "MemoryRepository", "MemoryStore", "build_repository"]


def build_repository(settings: Settings | None = None, clock: Clock = utc_now) -> Repository:
    """Pick the storage variant for this process from STORAGE_BACKEND."""
    settings = settings or get_settings()
    choice = settings.storage_backend
    if choice == "memory":
        logger.info("Using in-memory storage (STORAGE_BACKEND=memory)")
        return MemoryRepository(clock=clock)
    if not sqlite_available():
        if choice == "sql":
            raise RuntimeError("STORAGE_BACKEND=sql but the sqlite3 driver cannot be loaded.")
        logger.warning("sqlite3 driver unavailable; falling back to in-memory storage, data will not persist")
        return MemoryRepository(clock=clock)
    logger.info("Using SQL storage at %s", settings.database_url)
    return SQLRepository(make_engine(settings.database_url), clock=clock)
