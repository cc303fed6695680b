"""
Pytest fixtures for Unotable tests.
"""

import random

import pytest

from ..engine_core.engine import GameEngine
from .helpers import RecordingStore


@pytest.fixture
def store() -> RecordingStore:
    """Store that records calls instead of persisting."""
    return RecordingStore()


@pytest.fixture
def engine(store: RecordingStore) -> GameEngine:
    """Engine with a seeded shuffle and a recording store."""
    return GameEngine(store=store, rng=random.Random(1234))


@pytest.fixture
def two_player_game(engine: GameEngine):
    """Engine with a freshly dealt game for A and B."""
    result = engine.start(["A", "B"])
    assert result.success
    return engine
