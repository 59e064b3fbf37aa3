"""
Desktop game window using pygame.

Hosts the simulation: turns mouse and keyboard into bus events, runs one
tick per frame, blits the rendered buffer and draws the score and the
start/game-over overlays.
"""

import pygame
import asyncio
import logging
import random
from dataclasses import dataclass, field

from ..core.events import (
    Event,
    EventBus,
    EventType,
    place_event,
    resize_event,
    start_event,
)
from ..core.state import Phase
from ..audio.engine import AudioEngine
from ..game.simulation import OVERLAY_GAME_OVER, OVERLAY_START, Simulation
from ..graphics.renderer import SceneRenderer
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

SCORE_BUMP_MS = 150.0


@dataclass
class UiState:
    """What the overlay layer shows, driven purely by bus events."""
    score: int = 0
    final_score: int = 0
    overlays: set[str] = field(default_factory=lambda: {OVERLAY_START})
    bump_ms: float = 0.0  # Score pop animation remaining

    def attach(self, event_bus: EventBus) -> None:
        event_bus.subscribe(EventType.SCORE_CHANGED, self.handle_event)
        event_bus.subscribe(EventType.OVERLAY_SHOW, self.handle_event)
        event_bus.subscribe(EventType.OVERLAY_HIDE, self.handle_event)

    def handle_event(self, event: Event) -> None:
        if event.type == EventType.SCORE_CHANGED:
            score = event.data.get("score", 0)
            if score > self.score:
                self.bump_ms = SCORE_BUMP_MS
            self.score = score
        elif event.type == EventType.OVERLAY_SHOW:
            overlay = event.data.get("overlay")
            self.overlays.add(overlay)
            if overlay == OVERLAY_GAME_OVER:
                self.final_score = event.data.get("score", self.score)
        elif event.type == EventType.OVERLAY_HIDE:
            self.overlays.discard(event.data.get("overlay"))

    def update(self, delta_ms: float) -> None:
        self.bump_ms = max(0.0, self.bump_ms - delta_ms)

    @property
    def overlay_visible(self) -> bool:
        return bool(self.overlays)


class GameWindow:
    """
    Main game window.

    Controls:
        MOUSE / SPACE: Drop the block (or start, while an overlay is up)
        RETURN: Start / restart
        M: Toggle mute
        D: Toggle debug overlay
        ESC / Q: Quit
    """

    def __init__(
        self,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        audio: AudioEngine | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()
        display = self.settings.display

        rng = random.Random(self.settings.seed)
        self.simulation = Simulation(
            settings=self.settings.game,
            event_bus=self.event_bus,
            width=display.width,
            height=display.height,
            rng=rng,
        )
        self.simulation.connect()

        self.audio = audio or AudioEngine(volume=self.settings.audio.volume)
        self.audio.attach(self.event_bus)

        self.ui = UiState()
        self.ui.attach(self.event_bus)

        self.renderer = SceneRenderer(background=display.background)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = self.settings.debug

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.settings.display.title)

        self._screen = pygame.display.set_mode(
            (self.settings.display.width, self.settings.display.height),
            pygame.RESIZABLE,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)
        self._big_font = pygame.font.SysFont(None, 64)

        if self.settings.audio.enabled:
            self.audio.init()

        logger.info(
            f"Pygame initialized: {self.settings.display.width}x{self.settings.display.height}"
        )

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_pointer()

            elif event.type == pygame.VIDEORESIZE:
                self.event_bus.queue_event(resize_event(event.w, event.h))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_m:
            self.audio.toggle_mute()
        elif key == pygame.K_RETURN:
            self.event_bus.queue_event(start_event(source="keyboard"))
        elif key == pygame.K_SPACE:
            self._handle_pointer(source="keyboard")

    def _handle_pointer(self, source: str = "pointer") -> None:
        """A click drops the block, or starts a run while an overlay is up."""
        if self.ui.overlay_visible:
            self.event_bus.queue_event(start_event(source=source))
        elif self.simulation.phase == Phase.PLAYING:
            self.event_bus.queue_event(place_event(source=source))

    def _render(self) -> None:
        if not self._screen:
            return

        buffer = self.renderer.render(self.simulation)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))

        self._render_score()
        if OVERLAY_START in self.ui.overlays:
            self._render_overlay("TOWER STACKER", "Click or press Enter to start")
        elif OVERLAY_GAME_OVER in self.ui.overlays:
            self._render_overlay(
                "GAME OVER",
                f"Score {self.ui.final_score}  -  click to restart",
            )
        if self._show_debug:
            self._render_debug()

        pygame.display.flip()

    def _render_score(self) -> None:
        if not self._big_font:
            return
        text = self._big_font.render(str(self.ui.score), True, (255, 255, 255))
        if self.ui.bump_ms > 0:
            scale = 1.0 + 0.3 * (self.ui.bump_ms / SCORE_BUMP_MS)
            size = (int(text.get_width() * scale), int(text.get_height() * scale))
            text = pygame.transform.smoothscale(text, size)
        rect = text.get_rect(midtop=(self._screen.get_width() // 2, 24))
        self._screen.blit(text, rect)

    def _render_overlay(self, title: str, subtitle: str) -> None:
        w, h = self._screen.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        self._screen.blit(shade, (0, 0))

        title_surface = self._big_font.render(title, True, (255, 255, 255))
        sub_surface = self._font.render(subtitle, True, (200, 200, 220))
        self._screen.blit(title_surface, title_surface.get_rect(center=(w // 2, h // 2 - 30)))
        self._screen.blit(sub_surface, sub_surface.get_rect(center=(w // 2, h // 2 + 20)))

    def _render_debug(self) -> None:
        state = self.simulation.run_state()
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: -",
            f"Phase: {state.phase.name}",
            f"Speed: {state.speed:.2f}",
            f"Scroll debt: {state.scroll_debt:.2f}",
            f"Debris: {len(self.simulation.debris)}",
            f"Height: {self.simulation.tower.height}",
        ]
        y = 10
        for line in lines:
            surface = self._font.render(line, True, (120, 200, 120))
            self._screen.blit(surface, (10, y))
            y += 22

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            # Input queued this frame reaches the simulation before it ticks
            await self.event_bus.process_queue()

            delta_ms = float(self._clock.get_time()) if self._clock else 0.0
            self.simulation.tick(delta_ms)
            self.ui.update(delta_ms)

            self._render()

            if self._clock:
                self._clock.tick(self.settings.display.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.audio.cleanup()
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        self._running = False
