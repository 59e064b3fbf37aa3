"""
Stacker audio engine - synthesized one-shot cues.

Three cues: "drop" on a successful placement, "error" on a clean miss,
"gameover" when the run ends. Re-triggering a cue restarts it.
"""

import pygame
import array
import logging
from typing import Dict, Optional

from stacker.core.events import Event, EventBus, EventType
from stacker.audio.synth import SAMPLE_RATE, envelope, sine, square

logger = logging.getLogger(__name__)

CUES = ("drop", "error", "gameover")


class AudioEngine:
    """Plays the game's sound cues through pygame.mixer."""

    def __init__(self, volume: float = 0.6):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = volume
        self._muted = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and synthesize the cues."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            self._generate_all_sounds()
            self._initialized = True
            logger.info("Audio engine initialized")
            return True
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def attach(self, event_bus: EventBus):
        """Play cues requested on the bus. Returns the unsubscribe function."""
        return event_bus.subscribe(EventType.SOUND_PLAY, self.handle_sound_event)

    def handle_sound_event(self, event: Event) -> None:
        self.play(event.data.get("name", ""))

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        self._gen_drop()
        self._gen_error()
        self._gen_gameover()
        logger.debug(f"Generated {len(self._sounds)} sounds")

    def _gen_drop(self) -> None:
        """Short thud with a click on top."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.12)):
            t = i / SAMPLE_RATE
            env = envelope(t, 9)
            val = sine(t, 110 - t * 300) * 0.5 + square(t, 880) * 0.08 * envelope(t, 40)
            samples.append(int(val * env * 32767))
        self._sounds["drop"] = self._create_sound(samples)

    def _gen_error(self) -> None:
        """Error buzz."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.2)):
            t = i / SAMPLE_RATE
            env = envelope(t, 5)
            val = square(t, 120) * 0.3
            samples.append(int(val * env * 32767))
        self._sounds["error"] = self._create_sound(samples)

    def _gen_gameover(self) -> None:
        """Three falling notes."""
        samples = array.array('h')
        notes = [392, 330, 262]
        for i in range(int(SAMPLE_RATE * 0.6)):
            t = i / SAMPLE_RATE
            note_idx = min(int(t * 5), 2)
            env = envelope(t - note_idx * 0.2, 3)
            val = square(t, notes[note_idx]) * 0.25
            samples.append(int(val * env * 32767))
        self._sounds["gameover"] = self._create_sound(samples)

    # ===== PLAYBACK API =====

    def play(self, sound_name: str) -> Optional[pygame.mixer.Channel]:
        """Play a cue from the start, cutting off any earlier playback of it."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        sound.stop()
        sound.set_volume(self._volume)
        return sound.play()

    def set_volume(self, volume: float) -> None:
        self._volume = max(0.0, min(1.0, volume))

    def get_volume(self) -> float:
        return self._volume

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        if self._initialized:
            if self._muted:
                pygame.mixer.pause()
            else:
                pygame.mixer.unpause()
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            logger.info("Audio engine cleaned up")
