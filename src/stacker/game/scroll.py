"""Camera-follow by moving the world instead of the view.

When the tower top climbs past the middle of the screen a fixed amount of
scroll debt is booked. Each tick a fraction of the outstanding debt is added
to the y of every live entity, giving an ease-out slide.
"""

import logging
from typing import Iterable, Optional

from stacker.game.entities import Block

logger = logging.getLogger(__name__)

SETTLE_EPSILON = 1e-3


class ScrollCompensator:
    """Accumulates and pays off scroll debt."""

    def __init__(self, step: float = 30.0, ease: float = 0.1):
        self.step = step
        self.ease = ease
        self.debt = 0.0
        self._counted: Optional[Block] = None

    def reset(self) -> None:
        self.debt = 0.0
        self._counted = None

    def track(self, top: Block, viewport_height: float) -> bool:
        """Book one step of debt if ``top`` is above the screen midline.

        Each top block is booked at most once. Returns True when debt was added.
        """
        if top is self._counted:
            return False
        if top.y < viewport_height / 2:
            self._counted = top
            self.debt += self.step
            logger.debug(f"Scroll debt +{self.step}, now {self.debt:.2f}")
            return True
        return False

    def apply(self, entities: Iterable) -> float:
        """Shift all entities by this tick's share of the debt.

        Returns the delta applied (0.0 when nothing is owed).
        """
        if self.debt <= 0:
            return 0.0

        move = self.debt * self.ease
        self.debt -= move
        if self.debt < SETTLE_EPSILON:
            move += self.debt
            self.debt = 0.0

        for entity in entities:
            entity.y += move

        return move
