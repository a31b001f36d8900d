"""Shared pytest fixtures for MultiTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from multitimer.timer.registry import TimerRegistry

from helpers import FakeClock, RecordingAlerts


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("multitimer.settings.SETTINGS_PATH", path)
    yield path


@pytest.fixture
def clock():
    """Manually advanced clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def alerts():
    return RecordingAlerts()


@pytest.fixture
def registry(clock, alerts):
    """Empty registry on the fake clock, recording alert calls."""
    return TimerRegistry(clock=clock, alerts=alerts)
