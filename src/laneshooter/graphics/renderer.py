"""Draws game snapshots into an RGB buffer."""

from dataclasses import dataclass
import logging
import random
from typing import List, Optional, Tuple

import numpy as np

from laneshooter.game.snapshot import Snapshot
from laneshooter.graphics.primitives import (
    Buffer,
    Color,
    clear,
    draw_circle,
    draw_rect,
    draw_triangle,
    new_buffer,
)

logger = logging.getLogger(__name__)


@dataclass
class Palette:
    background: Color = (0, 0, 0)
    lane_divider: Color = (40, 40, 48)
    border: Color = (219, 39, 119)     # pink
    player: Color = (59, 130, 246)     # blue
    projectile: Color = (250, 204, 21)  # yellow
    enemy: Color = (219, 39, 119)
    enemy_core: Color = (255, 255, 255)


@dataclass
class Star:
    x: int
    y: int
    size: int
    brightness: float


class SceneRenderer:
    """Pure consumer of snapshots; never touches game state."""

    SHIP_HALF_WIDTH = 8
    SHIP_HEIGHT = 16
    PROJECTILE_W = 2
    PROJECTILE_H = 6
    STAR_COUNT = 50

    def __init__(
        self,
        width: int,
        height: int,
        lane_count: int = 4,
        palette: Optional[Palette] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.lane_count = lane_count
        self.palette = palette or Palette()
        self._background = self._build_background(random.Random(seed))

    def _build_background(self, rng: random.Random) -> Buffer:
        """Static layer: black field, lane dividers and a star field."""
        buffer = new_buffer(self.width, self.height)
        clear(buffer, self.palette.background)

        stars: List[Star] = [
            Star(
                x=rng.randrange(self.width),
                y=rng.randrange(self.height),
                size=rng.choice((1, 2)),
                brightness=rng.random() * 0.7 + 0.3,
            )
            for _ in range(self.STAR_COUNT)
        ]
        for star in stars:
            level = int(255 * star.brightness)
            draw_rect(buffer, star.x, star.y, star.size, star.size, (level, level, level))

        lane_width = self.width / self.lane_count
        for i in range(1, self.lane_count):
            draw_rect(buffer, int(lane_width * i), 0, 1, self.height, self.palette.lane_divider)

        draw_rect(buffer, 0, 0, self.width, self.height, self.palette.border, filled=False)
        return buffer

    def new_frame(self) -> Buffer:
        return new_buffer(self.width, self.height)

    def render(self, snapshot: Snapshot, buffer: Optional[Buffer] = None) -> Buffer:
        """Draw ``snapshot`` into ``buffer`` (allocated when omitted)."""
        if buffer is None:
            buffer = self.new_frame()
        np.copyto(buffer, self._background)

        if snapshot.is_active:
            self._draw_ship(buffer, snapshot.player_x, snapshot.player_y)

        for p in snapshot.projectiles:
            draw_rect(
                buffer,
                int(p.x - self.PROJECTILE_W / 2),
                int(p.y - self.PROJECTILE_H / 2),
                self.PROJECTILE_W,
                self.PROJECTILE_H,
                self.palette.projectile,
            )

        for e in snapshot.enemies:
            # Sprites are half the collision radius
            radius = e.size / 2
            draw_circle(buffer, e.x, e.y, radius, self.palette.enemy)
            draw_circle(buffer, e.x, e.y, max(radius - 3, 1), self.palette.enemy_core, filled=False)

        return buffer

    def _draw_ship(self, buffer: Buffer, x: float, y: float) -> None:
        half = self.SHIP_HALF_WIDTH
        top: Tuple[float, float] = (x, y - self.SHIP_HEIGHT / 2)
        left = (x - half, y + self.SHIP_HEIGHT / 2)
        right = (x + half, y + self.SHIP_HEIGHT / 2)
        draw_triangle(buffer, top, left, right, self.palette.player)
