"""
Phase machine for a stacker run.

Phases:
    MENU: Idle, start overlay visible, base block stationary
    PLAYING: Active simulation
    GAMEOVER: Frozen except residual debris, end overlay after a delay
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Run phases."""
    MENU = auto()
    PLAYING = auto()
    GAMEOVER = auto()


class PhaseMachine:
    """
    Tracks the current phase and validates transitions.

    Listeners are notified after every successful transition.
    """

    # Valid phase transitions
    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.MENU, Phase.PLAYING),        # Start
        (Phase.PLAYING, Phase.PLAYING),     # Restart mid-run
        (Phase.PLAYING, Phase.GAMEOVER),    # Miss or too narrow
        (Phase.GAMEOVER, Phase.PLAYING),    # Restart
    ]

    def __init__(self, initial_phase: Phase = Phase.MENU) -> None:
        self._phase = initial_phase
        self._listeners: list[Callable[[Phase, Phase], None]] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: Callable[[Phase, Phase], None]) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)
