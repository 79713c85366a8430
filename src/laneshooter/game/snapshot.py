"""Read-only view of a session for renderers and other consumers."""

from dataclasses import asdict, dataclass
from typing import Any

from laneshooter.core.state import SessionStatus


@dataclass(frozen=True)
class ProjectileView:
    id: int
    x: float
    y: float


@dataclass(frozen=True)
class EnemyView:
    id: int
    x: float
    y: float
    size: float


@dataclass(frozen=True)
class Snapshot:
    """State exposed after each tick. Consumers must treat it as immutable."""

    status: SessionStatus
    score: int
    difficulty_level: int
    lane: int
    player_x: float
    player_y: float
    projectiles: tuple[ProjectileView, ...]
    enemies: tuple[EnemyView, ...]

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    @property
    def is_game_over(self) -> bool:
        return self.status is SessionStatus.GAME_OVER

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.name
        data["projectiles"] = [asdict(p) for p in self.projectiles]
        data["enemies"] = [asdict(e) for e in self.enemies]
        return data


def take_snapshot(session, world) -> Snapshot:
    """Build a snapshot from a session and its world."""
    return Snapshot(
        status=session.status,
        score=session.score,
        difficulty_level=session.difficulty_level,
        lane=session.lane,
        player_x=world.player_x(session.lane),
        player_y=world.player_y,
        projectiles=tuple(ProjectileView(p.id, p.x, p.y) for p in session.projectiles),
        enemies=tuple(EnemyView(e.id, e.x, e.y, e.size) for e in session.enemies),
    )
