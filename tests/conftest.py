from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Garantiza que el paquete reparto sea importable durante los tests locales
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reparto.core import config as core_config  # noqa: E402
from reparto.db.session import make_engine  # noqa: E402
from reparto.repositories import MemoryRepository, SQLRepository  # noqa: E402


class TickingClock:
    """Each call advances one second, so created_at values never tie."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture()
def clock():
    return TickingClock()


@pytest.fixture()
def sql_repo(tmp_path, clock):
    """SQLRepository over a temporary SQLite file; engine disposed on teardown."""
    db_file = tmp_path / "test.db"
    repo = SQLRepository(make_engine(f"sqlite:///{db_file}"), clock=clock)
    yield repo
    repo.dispose()


@pytest.fixture()
def memory_repo(clock):
    return MemoryRepository(clock=clock)


@pytest.fixture(params=["sql", "memory"])
def repo(request):
    """Runs the test once per storage variant."""
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture()
def clean_settings(monkeypatch):
    for var in ("APP_ENV", "HOST", "PORT", "DATABASE_URL", "STORAGE_BACKEND", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()
