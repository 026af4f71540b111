"""Shared pytest fixtures for all tests."""

import pytest
from datetime import datetime, timezone

from sunshift.clock import ClockError, TimePoint
from sunshift.display import DisplayAdjuster
from sunshift.logger import logger
from sunshift.mock_hardware import MockDisplayBackend
from sunshift.models import build_settings

# Equator / Greenwich at the March 2024 equinox: sun nearly overhead at noon
EQUINOX_NOON = datetime(2024, 3, 20, 12, 7, 30, tzinfo=timezone.utc)
EQUINOX_MIDNIGHT = datetime(2024, 3, 20, 0, 7, 30, tzinfo=timezone.utc)


class FakeClock:
    """Clock collaborator that only moves when told to."""

    def __init__(self, start: datetime = EQUINOX_NOON):
        self.current = TimePoint.from_timestamp(start.timestamp())
        self.fail = False
        self.reads = 0

    def now(self) -> TimePoint:
        self.reads += 1
        if self.fail:
            raise ClockError("clock unavailable")
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current.add_seconds(seconds)


@pytest.fixture
def clock():
    """Fake clock set to solar noon at the equator (daytime)."""
    return FakeClock()


@pytest.fixture
def night_clock():
    """Fake clock set to solar midnight at the equator (night)."""
    return FakeClock(EQUINOX_MIDNIGHT)


@pytest.fixture
def mock_backend():
    """Recording display backend."""
    return MockDisplayBackend()


@pytest.fixture
def adjuster(mock_backend):
    """DisplayAdjuster wrapping the recording backend."""
    return DisplayAdjuster([mock_backend])


@pytest.fixture
def settings():
    """Equator/Greenwich settings with default temperatures."""
    return build_settings(0.0, 0.0, day_temp=5500, night_temp=3700)


@pytest.fixture
def make_settings():
    """Factory for settings with overrides."""
    def _make(latitude=0.0, longitude=0.0, **kwargs):
        return build_settings(latitude, longitude, **kwargs)
    return _make


@pytest.fixture
def log(caplog):
    """caplog attached to the sunshift logger, which does not propagate."""
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
