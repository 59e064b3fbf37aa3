"""Game simulation: entities, placement, tower, scrolling and the driver."""

from stacker.game.entities import Block, Debris
from stacker.game.placement import Placement, PlacementOutcome, resolve
from stacker.game.scroll import ScrollCompensator
from stacker.game.simulation import RunState, Simulation
from stacker.game.tower import Tower

__all__ = [
    "Block",
    "Debris",
    "Placement",
    "PlacementOutcome",
    "resolve",
    "ScrollCompensator",
    "RunState",
    "Simulation",
    "Tower",
]
