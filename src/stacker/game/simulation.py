"""Tower Stacker simulation driver.

Owns the run: the tower, the sliding block, falling debris, score, speed
and scroll debt. One call to tick() advances the world by one frame.
Everything the outside world needs to know (sound cues, score, overlays)
goes out through the event bus.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from stacker.core.events import Event, EventBus, EventType, sound_event
from stacker.core.state import Phase, PhaseMachine
from stacker.game.entities import Block, Debris, age_debris
from stacker.game.placement import Placement, PlacementOutcome, resolve
from stacker.game.scroll import ScrollCompensator
from stacker.game.tower import Tower
from stacker.settings import GameSettings

logger = logging.getLogger(__name__)

OVERLAY_START = "start"
OVERLAY_GAME_OVER = "game_over"


@dataclass(frozen=True)
class RunState:
    """Snapshot of the run counters."""
    phase: Phase
    score: int
    speed: float
    scroll_debt: float


class Simulation:
    """Frame-driven stacker game.

    Lifecycle:
        1. start() - reset the run and spawn the first block
        2. handle_input(event) - queue a placement or (re)start
        3. tick(delta_ms) - consume input, move, age debris, scroll
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        event_bus: Optional[EventBus] = None,
        width: float = 480,
        height: float = 720,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        self.event_bus = event_bus or EventBus()
        self.width = width
        self.height = height
        self._rng = rng or random.Random()

        self.phases = PhaseMachine()
        self.phases.add_listener(self._on_phase_change)

        self.tower = Tower(base_offset=self.settings.base_offset)
        self.scroll = ScrollCompensator(
            step=self.settings.block_height,
            ease=self.settings.scroll_ease,
        )
        self.debris: List[Debris] = []
        self.current_block: Optional[Block] = None

        self.score = 0
        self.speed = self.settings.initial_speed
        self.final_score = 0

        self._placement_pending = False
        self._game_over_timer = 0.0
        self._game_over_shown = False

        self._reset_run()

    # State
    @property
    def phase(self) -> Phase:
        return self.phases.phase

    @property
    def scroll_debt(self) -> float:
        return self.scroll.debt

    @property
    def game_over_shown(self) -> bool:
        """True once the end overlay delay has elapsed."""
        return self._game_over_shown

    def run_state(self) -> RunState:
        return RunState(
            phase=self.phase,
            score=self.score,
            speed=self.speed,
            scroll_debt=self.scroll.debt,
        )

    def live_entities(self) -> list:
        """Every world-space object that scrolls together."""
        entities: list = list(self.tower)
        entities.extend(self.debris)
        if self.current_block is not None:
            entities.append(self.current_block)
        return entities

    # Wiring
    def connect(self) -> List[Callable[[], None]]:
        """Subscribe to input events on the bus. Returns unsubscribe functions."""
        return [
            self.event_bus.subscribe(EventType.PLACE, self.handle_input),
            self.event_bus.subscribe(EventType.START, self.handle_input),
            self.event_bus.subscribe(EventType.RESIZE, self.handle_input),
        ]

    def handle_input(self, event: Event) -> bool:
        """Process an input event. Returns True if it was used."""
        if event.type == EventType.PLACE:
            if self.phase != Phase.PLAYING or self.current_block is None:
                return False
            self._placement_pending = True
            return True

        if event.type == EventType.START:
            return self.start()

        if event.type == EventType.RESIZE:
            self.resize(event.data["width"], event.data["height"])
            return True

        return False

    # Transitions
    def start(self) -> bool:
        """Begin a fresh run from MENU, PLAYING or GAMEOVER."""
        if not self.phases.transition(Phase.PLAYING):
            return False

        self._emit(EventType.OVERLAY_HIDE, overlay=OVERLAY_START)
        self._emit(EventType.OVERLAY_HIDE, overlay=OVERLAY_GAME_OVER)
        self._reset_run()
        self.spawn_block()
        return True

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        logger.debug(f"Viewport resized to {width}x{height}")
        if self.phase == Phase.MENU:
            self._reset_run()

    def spawn_block(self) -> Block:
        """Put a new sliding block one slab above the tower top."""
        prev = self.tower.top()
        palette = self.settings.palette

        direction = 1 if self._rng.random() > 0.5 else -1
        x = -prev.width if direction == 1 else self.width

        self.current_block = Block(
            x=x,
            y=prev.y - self.settings.block_height,
            width=prev.width,
            depth=self.settings.block_height,
            color=palette[self.score % len(palette)],
            speed=self.speed,
            direction=direction,
        )
        return self.current_block

    def place(self) -> Optional[Placement]:
        """Drop the current block onto the tower.

        No-op (returns None) outside PLAYING or with no block in flight.
        """
        current = self.current_block
        if self.phase != Phase.PLAYING or current is None:
            return None

        placement = resolve(current, self.tower.top(), self.settings.min_width)
        logger.debug(
            f"Placement {placement.outcome.value}: offset={placement.offset:.1f} "
            f"overlap={placement.overlap:.1f}"
        )

        if placement.debris is not None:
            self.debris.append(placement.debris)

        if placement.outcome == PlacementOutcome.MISS:
            self.current_block = None
            self._emit_sound("error")
            self.game_over()
            return placement

        self.tower.push(placement.block)
        self.score += 1
        self.speed += self.settings.speed_increment
        self._emit(EventType.SCORE_CHANGED, score=self.score)
        self._emit_sound("drop")

        if placement.outcome == PlacementOutcome.GAME_OVER:
            self.game_over()
            return placement

        self.spawn_block()
        return placement

    def game_over(self) -> None:
        if not self.phases.transition(Phase.GAMEOVER):
            return

        self.current_block = None
        self._placement_pending = False
        self.final_score = self.score
        self._game_over_timer = 0.0
        self._game_over_shown = False
        self._emit_sound("gameover")
        logger.info(f"Game over, score {self.score}, tower height {self.tower.height}")

    # Frame update
    def tick(self, delta_ms: float = 1000.0 / 60) -> None:
        """Advance the world one frame.

        Movement is in distance per tick; delta_ms only drives UI timers.
        """
        if self._placement_pending:
            self._placement_pending = False
            self.place()

        if self.phase == Phase.PLAYING and self.current_block is not None:
            self.current_block.advance(self.width)

        self.debris = age_debris(
            self.debris,
            self.height,
            self.settings.gravity,
            self.settings.fade_rate,
        )

        if self.phase == Phase.PLAYING:
            # The base never books scroll, only placed blocks do
            if self.tower.height > 0:
                self.scroll.track(self.tower.top(), self.height)
            self.scroll.apply(self.live_entities())

        if self.phase == Phase.GAMEOVER and not self._game_over_shown:
            self._game_over_timer += delta_ms
            if self._game_over_timer >= self.settings.game_over_delay_ms:
                self._game_over_shown = True
                self._emit(
                    EventType.OVERLAY_SHOW,
                    overlay=OVERLAY_GAME_OVER,
                    score=self.final_score,
                )

    # Internals
    def _reset_run(self) -> None:
        self.tower.reset(
            self.width,
            self.height,
            self.settings.base_width,
            self.settings.block_height,
            self.settings.palette[0],
        )
        self.debris = []
        self.current_block = None
        self.score = 0
        self.speed = self.settings.initial_speed
        self.scroll.reset()
        self._placement_pending = False
        self._game_over_timer = 0.0
        self._game_over_shown = False
        self._emit(EventType.SCORE_CHANGED, score=0)

    def _on_phase_change(self, old: Phase, new: Phase) -> None:
        self._emit(EventType.PHASE_CHANGED, old=old, new=new)

    def _emit(self, event_type: EventType, **data) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="simulation"))

    def _emit_sound(self, name: str) -> None:
        self.event_bus.emit(sound_event(name))
