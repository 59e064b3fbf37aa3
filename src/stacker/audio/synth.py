"""Waveform helpers for the synthesized cues."""

import math

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def envelope(t: float, decay: float) -> float:
    """Linear decay from 1 at t=0 to 0 at t=1/decay. Zero before t=0."""
    if t < 0:
        return 0.0
    return max(0.0, 1 - t * decay)
