"""
Session state and the per-tick simulation step.

A ``Session`` is an immutable value. ``start_session`` and ``advance`` take
the current value and return the next one, which keeps the simulation
replayable: the same session, intents, timestamps and seeded spawner always
produce the same result.

Tick order (``advance``):
    1. difficulty from the current score
    2. lane steps, then fire
    3. projectiles move and leave through the top edge
    4. spawner
    5. enemies move and leave through the bottom edge
    6. one projectile/enemy hit at most
    7. player/enemy contact -> GAME_OVER
"""

from dataclasses import dataclass, field, replace
from typing import Optional
import logging

from laneshooter.config.settings import Settings
from laneshooter.core.state import SessionStatus, check_transition
from laneshooter.game.collision import Hit, find_player_collision, resolve_projectile_hit
from laneshooter.game.difficulty import difficulty_for, level_for
from laneshooter.game.entities import Enemy, Projectile
from laneshooter.game.input import Intents
from laneshooter.game.lanes import LaneModel
from laneshooter.game.motion import advance_enemies, advance_projectiles
from laneshooter.game.spawner import Spawner

logger = logging.getLogger(__name__)

START_LANE = 1


@dataclass(frozen=True)
class World:
    """Static geometry and tuning shared by every tick."""

    settings: Settings
    lanes: LaneModel

    @classmethod
    def from_settings(cls, settings: Settings) -> "World":
        playfield = settings.playfield
        return cls(settings=settings, lanes=LaneModel(playfield.width, playfield.lane_count))

    @property
    def player_y(self) -> float:
        return self.settings.player_y

    def player_x(self, lane: int) -> float:
        return self.lanes.center_x(lane)


@dataclass(frozen=True)
class Session:
    """Everything that changes while a game is played."""

    status: SessionStatus = SessionStatus.IDLE
    score: int = 0
    lane: int = START_LANE
    projectiles: tuple[Projectile, ...] = ()
    enemies: tuple[Enemy, ...] = ()
    last_spawn: float = 0.0
    next_id: int = 1
    points_per_level: int = field(default=10, repr=False)

    @property
    def difficulty_level(self) -> int:
        return level_for(self.score, self.points_per_level)

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE


@dataclass(frozen=True)
class TickOutcome:
    """Result of one tick: the next session plus what happened during it."""

    session: Session
    fired: Optional[Projectile] = None
    spawned: Optional[Enemy] = None
    hit: Optional[Hit] = None
    crashed: Optional[Enemy] = None


def clamp_lane(index: int, lanes: LaneModel) -> int:
    """Clamp a lane index to the playfield, no wraparound."""
    return max(lanes.first, min(lanes.last, index))


def start_session(session: Session) -> Session:
    """Fresh ACTIVE session: no entities, score 0, starting lane."""
    status = check_transition(session.status, SessionStatus.ACTIVE)
    return Session(
        status=status,
        lane=START_LANE,
        next_id=session.next_id,
        points_per_level=session.points_per_level,
    )


def advance(
    session: Session,
    intents: Intents,
    timestamp: float,
    world: World,
    spawner: Spawner,
) -> TickOutcome:
    """Run one tick. Sessions that are not ACTIVE come back unchanged."""
    if not session.is_active:
        return TickOutcome(session=session)

    settings = world.settings
    difficulty = difficulty_for(session.score, settings.difficulty)
    next_id = session.next_id

    lane = session.lane
    for step in intents.lane_steps:
        lane = clamp_lane(lane + step, world.lanes)
    player_x = world.player_x(lane)

    projectiles = session.projectiles
    fired = None
    if intents.fire:
        fired = Projectile(id=next_id, x=player_x, y=world.player_y - settings.entities.muzzle_offset)
        next_id += 1
        projectiles = projectiles + (fired,)

    speed = settings.entities.projectile_speed * difficulty.projectile_speed_multiplier
    projectiles = advance_projectiles(projectiles, speed)

    enemies = session.enemies
    last_spawn = session.last_spawn
    spawned = None
    if spawner.due(timestamp, last_spawn, difficulty):
        spawned = spawner.spawn(next_id, difficulty)
        next_id += 1
        enemies = enemies + (spawned,)
        last_spawn = timestamp

    enemies = advance_enemies(enemies, settings.playfield.height)

    score = session.score
    hit = resolve_projectile_hit(projectiles, enemies)
    remaining = enemies
    if hit is not None:
        projectiles = hit.projectiles
        remaining = hit.enemies
        score += 1
        logger.debug(f"Enemy {hit.enemy.id} destroyed by projectile {hit.projectile.id}, score={score}")

    # Contact is checked against every enemy that survived motion, including
    # one a projectile removed above.
    crashed = find_player_collision(enemies, player_x, world.player_y, settings.playfield.player_radius)
    status = session.status
    if crashed is not None:
        status = check_transition(status, SessionStatus.GAME_OVER)

    next_session = replace(
        session,
        status=status,
        score=score,
        lane=lane,
        projectiles=projectiles,
        enemies=remaining,
        last_spawn=last_spawn,
        next_id=next_id,
    )
    return TickOutcome(session=next_session, fired=fired, spawned=spawned, hit=hit, crashed=crashed)
