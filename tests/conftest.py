"""Shared fixtures: deterministic random sources and sample signals."""

from __future__ import annotations

from datetime import date

import pytest

from climate_risk.models import MonitoredLocation, RawSignal


class ZeroRandom:
    """Random source pinned to the low end of every range."""

    def random(self) -> float:
        return 0.0

    def uniform(self, low: float, high: float) -> float:
        return low


class FixedRandom:
    """Random source returning the same fraction of every range."""

    def __init__(self, fraction: float):
        self.fraction = fraction

    def random(self) -> float:
        return self.fraction

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.fraction


@pytest.fixture
def zero_rng():
    return ZeroRandom()


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def check_date():
    return date(2026, 10, 18)


@pytest.fixture
def miami_signal():
    """Hot, dry, low-lying coastal city."""
    return RawSignal(temperature=35, humidity=20, precipitation=0, wind_speed=10)


@pytest.fixture
def roster():
    return [
        MonitoredLocation("Miami, FL", 25.7617, -80.1918, flood_prone=True),
        MonitoredLocation("Los Angeles, CA", 34.0522, -118.2437, wildfire_prone=True),
        MonitoredLocation("Houston, TX", 29.7604, -95.3698, flood_prone=True),
        MonitoredLocation("New York, NY", 40.7128, -74.0060),
        MonitoredLocation("Denver, CO", 39.7392, -104.9903),
        MonitoredLocation("San Francisco, CA", 37.7749, -122.4194, wildfire_prone=True),
    ]
