"""Core framework components for the stacker game."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType

__all__ = ["Phase", "PhaseMachine", "EventBus", "Event", "EventType"]
