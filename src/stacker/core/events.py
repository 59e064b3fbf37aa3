"""
Event bus for the stacker game.

Input commands (place, start, resize) are queued by the window and drained
once per frame, before the simulation ticks. Simulation notifications
(sound cues, score, overlays, phase) are dispatched as they happen.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Everything that travels over the bus."""
    # Input commands
    PLACE = auto()
    START = auto()
    RESIZE = auto()

    # Simulation notifications
    PHASE_CHANGED = auto()
    SCORE_CHANGED = auto()
    OVERLAY_SHOW = auto()
    OVERLAY_HIDE = auto()
    SOUND_PLAY = auto()


@dataclass
class Event:
    """
    One message on the bus.

    Attributes:
        type: What happened
        data: Payload, keyed by field name
        source: Component that produced the event
        timestamp: Monotonic creation time
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Typed pub/sub between the window, the simulation and the audio engine.

    emit() dispatches right away. queue_event() holds an event back until
    the next process_queue(), which the window awaits once per frame.
    A handler that raises is logged and the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``. Returns an unsubscribe function."""
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch ``event`` to its subscribers now."""
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Hold ``event`` until the next process_queue()."""
        self._queue.put_nowait(event)

    async def process_queue(self) -> int:
        """Dispatch every queued event in arrival order. Returns how many ran."""
        count = 0
        while not self._queue.empty():
            event = await self._queue.get()
            self._dispatch(event)
            self._queue.task_done()
            count += 1
        return count

    def _dispatch(self, event: Event) -> None:
        # Copy so a handler may unsubscribe while being called
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.name} handler: {e}")


# Constructors for the events the window and simulation produce
def place_event(source: str = "pointer") -> Event:
    """Drop the sliding block."""
    return Event(EventType.PLACE, source=source)


def start_event(source: str = "ui") -> Event:
    """Start or restart a run."""
    return Event(EventType.START, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    """The viewport changed size."""
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)


def sound_event(name: str, source: str = "simulation") -> Event:
    """Play a one-shot sound cue."""
    return Event(EventType.SOUND_PLAY, data={"name": name}, source=source)
