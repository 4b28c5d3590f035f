"""
Shared pytest fixtures for cooldown-manager tests.

This module provides:
- A controllable clock so cooldown windows can be crossed without sleeping
- A manager wired to that clock with the default configuration
"""

import sys
from pathlib import Path

import pytest

# Ensure cooldown_manager package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cooldown_manager import CooldownConfig, CooldownManager


class FakeClock:
    """Monotonic clock stand-in advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> CooldownConfig:
    return CooldownConfig()


@pytest.fixture
def manager(config: CooldownConfig, clock: FakeClock) -> CooldownManager:
    return CooldownManager(config=config, clock=clock)


@pytest.fixture
def calls() -> list[str]:
    """Collects action invocations."""
    return []
