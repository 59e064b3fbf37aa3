"""Tower Stacker - stop the sliding block, stack it high."""

__version__ = "0.1.0"
