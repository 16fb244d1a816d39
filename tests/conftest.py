"""Root conftest: shared fixtures for the month view.

Invariants:
    - No test touches the real user data directory
    - "Today" is pinned to 2025-04-15 (DateValue month 3) unless a test overrides it
    - The reminder clock is pinned to 2025-04-15 09:00
"""

import os
from datetime import datetime

import pytest

os.environ.setdefault("CALVIEW_DATA_DIR", os.path.join(os.path.dirname(__file__), ".calview-test-data"))

from calview.config import get_settings
from calview.core import CalendarController
from calview.data import InMemoryEventStore
from calview.domain import DateValue
from calview.services import NotificationEngine

TODAY = DateValue(year=2025, month=3, day=15)
NOW = datetime(2025, 4, 15, 9, 0)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point storage at a temp dir and rebuild cached settings around each test."""
    for name in list(os.environ):
        if name.startswith("CALVIEW_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CALVIEW_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return InMemoryEventStore()


@pytest.fixture
def engine(now):
    return NotificationEngine(now=lambda: now)


@pytest.fixture
def controller(store, engine, today):
    return CalendarController(store, engine, today=lambda: today)
