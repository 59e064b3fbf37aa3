"""Graphics module for the stacker rendering pipeline."""

from stacker.graphics.renderer import SceneRenderer
from stacker.graphics.primitives import (
    blend_rect,
    clear,
    draw_rect,
    new_buffer,
)

__all__ = [
    # Renderer
    "SceneRenderer",
    # Primitives
    "blend_rect",
    "clear",
    "draw_rect",
    "new_buffer",
]
