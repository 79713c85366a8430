"""Time-gated, randomized enemy creation."""

import logging
import random

from laneshooter.config.settings import EntitySettings, TimingSettings
from laneshooter.game.difficulty import Difficulty
from laneshooter.game.entities import Enemy
from laneshooter.game.lanes import LaneModel

logger = logging.getLogger(__name__)


class Spawner:
    """Creates one enemy per elapsed spawn interval.

    All randomness comes from the ``rng`` handed in, so a seeded
    ``random.Random`` makes spawns reproducible.
    """

    def __init__(
        self,
        lanes: LaneModel,
        rng: random.Random,
        entities: EntitySettings | None = None,
        timing: TimingSettings | None = None,
    ) -> None:
        self.lanes = lanes
        self.rng = rng
        self.entities = entities or EntitySettings()
        self.timing = timing or TimingSettings()

    def interval(self, difficulty: Difficulty) -> float:
        return self.timing.spawn_interval * difficulty.spawn_interval_multiplier

    def due(self, timestamp: float, last_spawn: float, difficulty: Difficulty) -> bool:
        return timestamp - last_spawn > self.interval(difficulty)

    def spawn(self, enemy_id: int, difficulty: Difficulty) -> Enemy:
        """Create an enemy at the top of a random lane."""
        cfg = self.entities
        lane = self.rng.randrange(self.lanes.count)
        size = cfg.enemy_size_min + self.rng.random() * (cfg.enemy_size_max - cfg.enemy_size_min)
        base_speed = cfg.enemy_speed_min + self.rng.random() * (cfg.enemy_speed_max - cfg.enemy_speed_min)

        enemy = Enemy(
            id=enemy_id,
            lane=lane,
            x=self.lanes.center_x(lane),
            y=0.0,
            size=size,
            speed=base_speed * difficulty.enemy_speed_multiplier,
        )
        logger.debug(f"Spawned enemy {enemy.id} in lane {lane} (size={size:.1f}, speed={enemy.speed:.2f})")
        return enemy
