"""
Configuration helpers for the Reparto backend.

Routers/repositories read settings from here instead of touching os.environ.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("auto", "sql", "memory")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    database_url: str
    storage_backend: str
    cors_origins: tuple[str, ...]
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        items = [item.strip() for item in (value or "").split(",")]
        return tuple(item for item in items if item)

    backend = (os.getenv("STORAGE_BACKEND") or "auto").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "auto"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "4000"), 4000),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./data.db").strip(),
        storage_backend=backend,
        cors_origins=_csv(os.getenv("CORS_ORIGINS", "*")) or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
