"""The tower of placed blocks."""

import logging
from typing import Iterator, List

from stacker.game.entities import Block

logger = logging.getLogger(__name__)


class Tower:
    """Append-only stack of placed blocks, oldest first."""

    def __init__(self, base_offset: float = 100.0):
        self.base_offset = base_offset
        self._blocks: List[Block] = []

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    @property
    def height(self) -> int:
        """Placed blocks above the base."""
        return max(0, len(self._blocks) - 1)

    def top(self) -> Block:
        """The current placement target.

        Raises IndexError on an empty tower, which cannot happen after reset().
        """
        return self._blocks[-1]

    def push(self, block: Block) -> None:
        block.stop()
        self._blocks.append(block)

    def reset(
        self,
        canvas_width: float,
        canvas_height: float,
        base_width: float,
        base_depth: float,
        color: tuple = (255, 154, 158),
    ) -> Block:
        """Clear the tower and seed it with a centred, stationary base block."""
        self._blocks.clear()

        base = Block(
            x=(canvas_width - base_width) / 2,
            y=canvas_height - self.base_offset,
            width=base_width,
            depth=base_depth,
            color=color,
            speed=0.0,
            direction=0,
            moving=False,
        )
        self._blocks.append(base)
        logger.debug(f"Tower reset, base at x={base.x:.1f} y={base.y:.1f}")
        return base
