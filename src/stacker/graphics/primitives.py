"""Rectangle drawing on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def _clip(buffer: Buffer, x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    """Round a float rectangle to pixels and clamp it to the buffer."""
    h, w = buffer.shape[:2]

    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw a 1px outline only
    """
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1, x1:x2] = color
        buffer[y2 - 1, x1:x2] = color
        buffer[y1:y2, x1] = color
        buffer[y1:y2, x2 - 1] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Fill a rectangle blended over the existing pixels.

    alpha is clamped to [0, 1]; 0 draws nothing, 1 is an opaque fill.
    """
    alpha = max(0.0, min(1.0, alpha))
    if alpha <= 0.0:
        return
    if alpha >= 1.0:
        draw_rect(buffer, x, y, width, height, color)
        return

    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    dst_region = buffer[y1:y2, x1:x2]
    src = np.array(color, dtype=np.float32)
    blended = (src * alpha + dst_region * (1 - alpha)).astype(np.uint8)
    buffer[y1:y2, x1:x2] = blended
