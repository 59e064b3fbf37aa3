"""Desktop host for the stacker game (pygame window)."""
