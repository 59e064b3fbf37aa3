"""Draws a simulation frame into an RGB buffer."""

from typing import Optional
import numpy as np
from numpy.typing import NDArray

from stacker.game.entities import Block, Debris
from stacker.game.simulation import Simulation
from stacker.graphics.primitives import Color, blend_rect, clear, draw_rect, new_buffer

HIGHLIGHT = (255, 255, 255)
SHADOW = (0, 0, 0)


class SceneRenderer:
    """Renders the tower, the sliding block and debris.

    Reads entity coordinates only; the simulation is never modified.
    """

    SHADOW_WIDTH = 5

    def __init__(self, background: Color = (20, 20, 30)):
        self.background = background
        self._buffer: Optional[NDArray[np.uint8]] = None

    def get_buffer(self, width: int, height: int) -> NDArray[np.uint8]:
        """Reuse the frame buffer, reallocating on size change."""
        if self._buffer is None or self._buffer.shape[:2] != (height, width):
            self._buffer = new_buffer(width, height)
        return self._buffer

    def render(self, simulation: Simulation) -> NDArray[np.uint8]:
        buffer = self.get_buffer(int(simulation.width), int(simulation.height))
        clear(buffer, self.background)

        for block in simulation.tower:
            self.draw_block(buffer, block)
        if simulation.current_block is not None:
            self.draw_block(buffer, simulation.current_block)
        for piece in simulation.debris:
            self.draw_debris(buffer, piece)

        return buffer

    def draw_block(self, buffer: NDArray[np.uint8], block: Block) -> None:
        """Slab with a light top edge and a darker right side."""
        draw_rect(buffer, block.x, block.y, block.width, block.depth, block.color)
        blend_rect(buffer, block.x, block.y, block.width, block.depth * 0.2, HIGHLIGHT, 0.2)
        blend_rect(
            buffer,
            block.x + block.width - self.SHADOW_WIDTH,
            block.y,
            self.SHADOW_WIDTH,
            block.depth,
            SHADOW,
            0.1,
        )

    def draw_debris(self, buffer: NDArray[np.uint8], piece: Debris) -> None:
        if piece.opacity <= 0:
            return
        blend_rect(buffer, piece.x, piece.y, piece.width, piece.height, piece.color, piece.opacity)
