"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. LANESHOOTER_TIMING__FIRE_COOLDOWN.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlayfieldSettings(BaseModel):
    """Playfield geometry."""

    width: float = Field(default=400.0, gt=0)
    height: float = Field(default=400.0, gt=0)
    lane_count: int = Field(default=4, ge=1)

    # Player ship sits this far above the bottom edge
    player_offset: float = 50.0
    player_radius: float = 15.0


class TimingSettings(BaseModel):
    """Debounce and cadence values, in scheduler time-units (ms)."""

    lane_debounce: float = 100.0
    fire_cooldown: float = 300.0
    spawn_interval: float = 500.0

    # Horizontal drag distance that counts as one lane swipe
    touch_threshold: float = 30.0


class EntitySettings(BaseModel):
    """Projectile and enemy parameters."""

    projectile_speed: float = 7.0
    muzzle_offset: float = 20.0

    enemy_size_min: float = 15.0
    enemy_size_max: float = 25.0
    enemy_speed_min: float = 1.0
    enemy_speed_max: float = 3.0


class DifficultySettings(BaseModel):
    """Per-level multiplier steps."""

    points_per_level: int = Field(default=10, ge=1)
    projectile_speed_step: float = 0.2
    enemy_speed_step: float = 0.3
    spawn_rate_step: float = 0.2
    fire_rate_step: float = 0.06


class DisplaySettings(BaseModel):
    """Simulator window settings."""

    scale: int = Field(default=2, ge=1)
    fps: int = 60
    window_width: int = 1100
    window_height: int = 860
    fullscreen: bool = False

    # Viewports at or below this width are treated as touch devices
    mobile_breakpoint: int = 768


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LANESHOOTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Seed for the spawner's random source; None draws from the OS
    seed: Optional[int] = None

    input_mode: Literal["auto", "discrete", "continuous"] = "auto"
    log_file: Optional[Path] = None

    # Directory with shoot.wav, laser_destroy.wav, game_over.wav (optional)
    sounds_path: Optional[Path] = None
    audio_enabled: bool = True

    # Nested settings
    playfield: PlayfieldSettings = Field(default_factory=PlayfieldSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)
    entities: EntitySettings = Field(default_factory=EntitySettings)
    difficulty: DifficultySettings = Field(default_factory=DifficultySettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def player_y(self) -> float:
        """Fixed vertical coordinate of the player ship."""
        return self.playfield.height - self.playfield.player_offset


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
