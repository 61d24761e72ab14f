from datetime import datetime
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
import pytest

from vitalsim.core.engine import VitalsEngine
from vitalsim.core.state import EngineConfig


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


class ScriptedRng:
    """
    Stand-in for numpy's Generator with scripted integer rolls.
    uniform() returns the midpoint and records the requested bounds.
    """
    def __init__(self, rolls):
        self.rolls = list(rolls)
        self.uniform_calls = []

    def integers(self, low, high=None, endpoint=False):
        return self.rolls.pop(0)

    def uniform(self, low, high):
        self.uniform_calls.append((low, high))
        return (low + high) / 2.0


@pytest.fixture
def rng():
    """Seeded generator so failures are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def config():
    return EngineConfig(rng_seed=42)


@pytest.fixture
def engine(config):
    """Engine with a fixed wall clock, not yet started."""
    return VitalsEngine(config, clock=lambda: FIXED_NOW)


@pytest.fixture
def running_engine(engine):
    """Engine past seeding, ready for steady ticks."""
    engine.start()
    return engine


@pytest.fixture
def advance_time():
    """Helper to feed clock time in fixed increments."""
    def _advance(engine, seconds, dt=0.5):
        published = []
        steps = int(seconds / dt)
        for _ in range(steps):
            published.extend(engine.advance(dt))
        remainder = seconds - steps * dt
        if remainder > 1e-9:
            published.extend(engine.advance(remainder))
        return published

    return _advance


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRng instances."""
    return ScriptedRng
