"""Difficulty scheduling derived from score.

Every multiplier is linear in ``level - 1`` and recomputed from the score on
each tick; nothing here caches state.
"""

from dataclasses import dataclass, field

from laneshooter.config.settings import DifficultySettings

_DEFAULTS = DifficultySettings()


def level_for(score: int, points_per_level: int = _DEFAULTS.points_per_level) -> int:
    """Difficulty level for a score: 1 for 0-9, 2 for 10-19, and so on."""
    return max(score, 0) // points_per_level + 1


@dataclass(frozen=True)
class Difficulty:
    """Speed and rate multipliers for one difficulty level."""

    level: int
    steps: DifficultySettings = field(default_factory=DifficultySettings, compare=False)

    @property
    def _rank(self) -> int:
        return self.level - 1

    @property
    def projectile_speed_multiplier(self) -> float:
        return 1 + self.steps.projectile_speed_step * self._rank

    @property
    def enemy_speed_multiplier(self) -> float:
        return 1 + self.steps.enemy_speed_step * self._rank

    @property
    def spawn_interval_multiplier(self) -> float:
        # Interval shrinks as the level rises
        return 1 / (1 + self.steps.spawn_rate_step * self._rank)

    @property
    def fire_cooldown_multiplier(self) -> float:
        return 1 / (1 + self.steps.fire_rate_step * self._rank)


def difficulty_for(score: int, steps: DifficultySettings = _DEFAULTS) -> Difficulty:
    """Build the difficulty for the current score."""
    return Difficulty(level=level_for(score, steps.points_per_level), steps=steps)
