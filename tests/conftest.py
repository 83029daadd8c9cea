"""Pytest fixtures and configuration for test suite."""
import os
import tempfile
from datetime import datetime

import pytest

from rpecalc.models import HistoryEntry
from rpecalc.repos import HistoryStore, IdFactory, MemorySlotStorage


@pytest.fixture
def sample_entry_data():
    """Sample history entry payload in storage format."""
    return {
        "id": "1730448000000",
        "weight": 100.0,
        "reps": 5,
        "rpe": 8.0,
        "oneRepMax": 133.0,
        "date": "2025-11-01T08:00:00",
        "liftType": "Squat",
    }


@pytest.fixture
def sample_entry(sample_entry_data):
    return HistoryEntry.model_validate(sample_entry_data)


@pytest.fixture
def make_entry():
    """Factory for valid entries with sequential ids."""
    def _make(n: int, lift_type: str = "Squat", **overrides) -> HistoryEntry:
        fields = {
            "id": str(1000 + n),
            "weight": 100.0 + n,
            "reps": 5,
            "rpe": 8.0,
            "one_rep_max": 133.0 + n,
            "date": f"2025-11-{(n % 28) + 1:02d}T08:00:00",
            "lift_type": lift_type,
        }
        fields.update(overrides)
        return HistoryEntry(**fields)
    return _make


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2025, 11, 1, 8, 30, 15)


@pytest.fixture
def memory_store(fixed_clock):
    """History store over in-memory slots with a deterministic clock."""
    storage = MemorySlotStorage()
    ticks = iter(range(1, 10_000))
    ids = IdFactory(clock=lambda: next(ticks) * 1_000_000)
    store = HistoryStore(storage, slot="rpeHistory", id_factory=ids, clock=fixed_clock)
    store.load()
    return store


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def mock_env_sqlite(temp_db, monkeypatch):
    """Mock environment for SQLite mode."""
    monkeypatch.setenv("DB_PATH", temp_db)
    monkeypatch.setenv("PERSIST_TARGET", "sqlite")
    return temp_db
