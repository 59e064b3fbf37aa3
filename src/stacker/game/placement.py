"""Placement resolution: overlap, trim and cut-off debris.

The in-flight block is compared with the top of the tower. The part that
overlaps survives as the new top, the overhang becomes debris. Nothing
here mutates its inputs.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from stacker.game.entities import Block, Debris

MIN_WIDTH = 10.0


class PlacementOutcome(Enum):
    HIT = "HIT"
    MISS = "MISS"
    GAME_OVER = "GAME_OVER"  # Hit, but the trimmed block is too narrow


@dataclass(frozen=True)
class Placement:
    """Result of resolving one drop."""
    outcome: PlacementOutcome
    offset: float
    overlap: float
    block: Optional[Block] = None
    debris: Optional[Debris] = None

    @property
    def landed(self) -> bool:
        """True when a trimmed block goes onto the tower."""
        return self.block is not None


def resolve(current: Block, top: Block, min_width: float = MIN_WIDTH) -> Placement:
    """Resolve dropping ``current`` onto ``top``.

    offset > 0 means the block hangs over the right edge: it keeps its x
    and the slice starting at ``current.x + overlap`` falls. Otherwise it
    hangs over the left edge: it snaps to ``top.x`` and the slice ending
    at ``top.x`` falls.
    """
    offset = current.x - top.x
    overlap = top.width - abs(offset)

    if overlap <= 0:
        debris = Debris(
            x=current.x,
            y=current.y,
            width=current.width,
            height=current.depth,
            color=current.color,
        )
        return Placement(PlacementOutcome.MISS, offset, overlap, debris=debris)

    if offset > 0:
        block = replace(current, width=overlap, moving=False)
        debris_x = current.x + overlap
    else:
        block = replace(current, x=top.x, width=overlap, moving=False)
        debris_x = top.x - abs(offset)

    debris = None
    if offset != 0:
        debris = Debris(
            x=debris_x,
            y=current.y,
            width=abs(offset),
            height=current.depth,
            color=current.color,
        )

    outcome = PlacementOutcome.GAME_OVER if overlap < min_width else PlacementOutcome.HIT
    return Placement(outcome, offset, overlap, block=block, debris=debris)
