# tests/conftest.py

import time
from datetime import datetime

import pytest

from pomocal.api.calendar import CalendarManager
from pomocal.core.storage import JsonStore, Preferences
from pomocal.core.todo_manager import TodoManager
from pomocal.core.utils import localize

from .fakes import FakeCalendarService


@pytest.fixture()
def day():
    """A fixed local day at noon, far from DST switches."""
    return localize(datetime(2025, 3, 12, 12, 0))


@pytest.fixture()
def store(tmp_path):
    return JsonStore(str(tmp_path / "data"))


@pytest.fixture()
def preferences(tmp_path):
    return Preferences(str(tmp_path / "config" / "preferences.json"))


@pytest.fixture()
def manager(store, preferences, day):
    """TodoManager on a temp folder, with the fixed day selected."""
    todo_manager = TodoManager(store, preferences)
    todo_manager.select_date(day)
    return todo_manager


@pytest.fixture()
def service():
    return FakeCalendarService()


@pytest.fixture()
def calendar(service):
    return CalendarManager(service=service)


@pytest.fixture()
def at(day):
    """Return a local datetime on the fixed day at hour:minute."""
    def make(hour, minute=0):
        return day.replace(hour=hour, minute=minute)
    return make


@pytest.fixture()
def berlin_tz(monkeypatch):
    """Run the test with the process local zone set to Europe/Berlin (CET/CEST)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
