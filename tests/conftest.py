"""Shared fixtures for the panel engine tests."""

import os

import pytest

# Qt host tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from orbrya.manager import PanelManager
from orbrya.panels import Size
from orbrya.persistence import MemoryStorage


class FakeSettings:
    """Dict-backed stand-in for QSettings."""

    def __init__(self, values=None):
        self.values = dict(values or {})
        self.synced = 0

    def value(self, key, default=None, type=None):
        raw = self.values.get(key, default)
        if type is None or raw is None or isinstance(raw, type):
            return raw
        # ini-backed QSettings stores everything as text
        if type is bool:
            return str(raw).lower() not in ("", "0", "false")
        try:
            return type(raw)
        except ValueError:
            raise TypeError(f"unable to convert {raw!r} to {type.__name__}") from None

    def setValue(self, key, value):
        self.values[key] = value

    def sync(self):
        self.synced += 1


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def workspace():
    return Size(1000, 800)


@pytest.fixture
def manager(workspace, storage):
    return PanelManager(workspace, storage=storage)


@pytest.fixture
def make_manager(storage):
    """Build managers sharing one storage, like reloading the page."""

    def _make(width=1000, height=800, **kwargs):
        kwargs.setdefault("storage", storage)
        return PanelManager(Size(width, height), **kwargs)

    return _make


@pytest.fixture
def fake_settings():
    return FakeSettings()
