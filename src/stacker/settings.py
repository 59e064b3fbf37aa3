"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Color = Tuple[int, int, int]


class GameSettings(BaseSettings):
    """Gameplay tuning."""

    model_config = SettingsConfigDict(env_prefix="STACKER_GAME_", extra="ignore")

    # Geometry
    base_width: float = Field(default=200.0, gt=0)
    block_height: float = Field(default=30.0, gt=0)
    base_offset: float = 100.0  # Base block sits this far above the bottom edge
    min_width: float = Field(default=10.0, ge=0)

    # Difficulty (distance per tick)
    initial_speed: float = Field(default=3.0, ge=0)
    speed_increment: float = Field(default=0.1, ge=0)

    # Debris physics
    gravity: float = 0.5
    fade_rate: float = Field(default=0.02, gt=0, le=1.0)

    # Camera
    scroll_ease: float = Field(default=0.1, gt=0, le=1.0)

    # UI
    game_over_delay_ms: float = Field(default=500.0, ge=0)

    palette: List[Color] = Field(default=[
        (255, 154, 158),
        (254, 207, 239),
        (161, 140, 209),
        (251, 194, 235),
        (143, 211, 244),
        (132, 250, 176),
    ])


class DisplaySettings(BaseSettings):
    """Window-related settings."""

    model_config = SettingsConfigDict(env_prefix="STACKER_DISPLAY_", extra="ignore")

    width: int = Field(default=480, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = 60
    title: str = "Tower Stacker"
    background: Color = (20, 20, 30)


class AudioSettings(BaseSettings):
    """Sound cue settings."""

    model_config = SettingsConfigDict(env_prefix="STACKER_AUDIO_", extra="ignore")

    enabled: bool = True
    volume: float = Field(default=0.6, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    seed: int | None = None  # Fixed spawn sequence when set

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
