"""Projectile and enemy records.

Entities are immutable; motion produces new instances. Nothing references
another entity, all relations are computed from positions each tick.
"""

from dataclasses import dataclass, replace
import math


@dataclass(frozen=True)
class Projectile:
    id: int
    x: float
    y: float

    def moved(self, dy: float) -> "Projectile":
        return replace(self, y=self.y + dy)


@dataclass(frozen=True)
class Enemy:
    id: int
    lane: int
    x: float
    y: float
    size: float   # collision radius
    speed: float  # difficulty-scaled at spawn time

    def moved(self) -> "Enemy":
        return replace(self, y=self.y + self.speed)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)
