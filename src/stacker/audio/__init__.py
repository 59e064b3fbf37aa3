"""
Stacker audio system - synthesized arcade cues.
"""

from .engine import AudioEngine, CUES

__all__ = ["AudioEngine", "CUES"]
