"""Shared fixtures: an in-memory stand-in for StateStore."""

import pytest

from dusty.commands import router


class FakeStore:
    """Keeps the State in memory and counts how often it's touched.

    Set `fail_load` / `fail_save` to an exception to make the next calls raise it.
    """

    def __init__(self, state=None):
        self.state = state
        self.loads = 0
        self.saves = 0
        self.fail_load = None
        self.fail_save = None

    def load(self):
        self.loads += 1
        if self.fail_load is not None:
            raise self.fail_load
        return self.state

    def save(self, state):
        self.saves += 1
        if self.fail_save is not None:
            raise self.fail_save
        self.state = state

    @property
    def accesses(self):
        return self.loads + self.saves


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def make_store():
    """Factory for a FakeStore that starts out holding `state`."""
    return FakeStore


@pytest.fixture(autouse=True)
def _isolate_router(tmp_path, monkeypatch):
    """Keep the router's request log and default store out of the project tree."""
    monkeypatch.setattr(router, "_LOG_PATH", str(tmp_path / "dusty.log"))
    monkeypatch.setattr(router, "_store", None)
    monkeypatch.setenv("DUSTY_LOCATION_FILE", str(tmp_path / "data" / "location.json"))
    monkeypatch.delenv("DUSTY_STALE_AFTER_QUERY", raising=False)
