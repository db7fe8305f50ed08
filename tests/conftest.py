"""
Pytest fixtures for wrap-snake tests.
"""

import os
import random

import pytest

# Keep the app's background ticker quiet during web tests
os.environ["WRAPSNAKE_BASE_TICK_INTERVAL_MS"] = "60000"
os.environ["WRAPSNAKE_SEED"] = "7"

from wrapsnake.config import get_settings
from wrapsnake.game import GameEngine
from wrapsnake.models import Heading, SessionState


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine_factory(rng):
    """Build an engine already in a given position."""
    def make(segments, heading=Heading.RIGHT, food=(0, 0), score=0, **kwargs):
        state = SessionState(
            segments=list(segments),
            heading=heading,
            food=food,
            score=score,
            tick_interval_ms=kwargs.pop("base_interval_ms", 100),
        )
        return GameEngine(
            rng=rng,
            state=state,
            base_interval_ms=state.tick_interval_ms,
            **kwargs,
        )
    return make
