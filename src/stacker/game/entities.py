"""World-space entities: the sliding block and falling debris."""

from dataclasses import dataclass

Color = tuple


@dataclass
class Block:
    """A block in flight or placed on the tower.

    ``x``/``y`` is the top-left corner in world space, ``depth`` is the
    visual height of the slab.
    """
    x: float
    y: float
    width: float
    depth: float
    color: Color = (255, 255, 255)
    speed: float = 0.0
    direction: int = 1  # -1 left, +1 right, 0 for the base block
    moving: bool = True

    @property
    def right(self) -> float:
        return self.x + self.width

    def advance(self, boundary_width: float) -> None:
        """Slide one tick and bounce off the horizontal bounds.

        Position is not clamped, a small overshoot past the edge is expected.
        """
        if not self.moving:
            return

        self.x += self.speed * self.direction

        # A block wider than boundary_width bounces with its right edge on the wall
        if self.x + self.width > boundary_width:
            self.direction = -1
        elif self.x < 0:
            self.direction = 1

    def stop(self) -> None:
        self.moving = False


@dataclass
class Debris:
    """A sliced-off piece falling out of play."""
    x: float
    y: float
    width: float
    height: float
    color: Color = (255, 255, 255)
    vy: float = 0.0
    opacity: float = 1.0

    def update(self, gravity: float = 0.5, fade_rate: float = 0.02) -> None:
        """Accelerate downward and fade for one tick."""
        self.vy += gravity
        self.y += self.vy
        self.opacity = max(0.0, self.opacity - fade_rate)

    def is_dead(self, viewport_height: float) -> bool:
        """Check if the piece fell below the view or faded out."""
        return self.y > viewport_height or self.opacity <= 0


def age_debris(
    debris: list[Debris],
    viewport_height: float,
    gravity: float = 0.5,
    fade_rate: float = 0.02,
) -> list[Debris]:
    """Advance every piece one tick and return the survivors."""
    for piece in debris:
        piece.update(gravity, fade_rate)

    return [p for p in debris if not p.is_dead(viewport_height)]
