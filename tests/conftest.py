"""Shared fixtures for stacker tests."""

import pytest

from stacker.core.events import EventBus, EventType
from stacker.game.simulation import Simulation
from stacker.settings import GameSettings

WIDTH = 480
HEIGHT = 720


class ScriptedRandom:
    """Stands in for random.Random, cycling through fixed values."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@pytest.fixture
def game_settings():
    return GameSettings()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def emitted(bus):
    """Every event dispatched on ``bus``, in order."""
    seen = []
    for event_type in EventType:
        bus.subscribe(event_type, seen.append)
    return seen


@pytest.fixture
def sim(game_settings, bus):
    """Simulation whose blocks always enter from the left, moving right."""
    return Simulation(
        settings=game_settings,
        event_bus=bus,
        width=WIDTH,
        height=HEIGHT,
        rng=ScriptedRandom([0.9]),
    )


def drop_at(simulation, x):
    """Move the sliding block to ``x`` and place it."""
    simulation.current_block.x = x
    return simulation.place()


def stack_perfectly(simulation, count):
    """Place ``count`` blocks exactly on top of the tower."""
    for _ in range(count):
        drop_at(simulation, simulation.tower.top().x)
