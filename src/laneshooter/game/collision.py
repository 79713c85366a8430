"""Circle-proximity collision checks.

Projectile hits resolve at most one pair per tick: enemies are scanned
newest first, and for each enemy the projectiles newest first; the first
pair within the enemy's radius is removed and the scan stops. Further
overlapping pairs wait for later ticks.
"""

from dataclasses import dataclass
from typing import Optional

from laneshooter.game.entities import Enemy, Projectile


@dataclass(frozen=True)
class Hit:
    """A resolved projectile/enemy pair and the collections without them."""
    enemy: Enemy
    projectile: Projectile
    enemies: tuple[Enemy, ...]
    projectiles: tuple[Projectile, ...]


def resolve_projectile_hit(
    projectiles: tuple[Projectile, ...],
    enemies: tuple[Enemy, ...],
) -> Optional[Hit]:
    """Find and remove the first colliding pair in reverse-insertion order."""
    for i in range(len(enemies) - 1, -1, -1):
        enemy = enemies[i]
        for j in range(len(projectiles) - 1, -1, -1):
            projectile = projectiles[j]
            if enemy.distance_to(projectile.x, projectile.y) < enemy.size:
                return Hit(
                    enemy=enemy,
                    projectile=projectile,
                    enemies=enemies[:i] + enemies[i + 1:],
                    projectiles=projectiles[:j] + projectiles[j + 1:],
                )
    return None


def find_player_collision(
    enemies: tuple[Enemy, ...],
    player_x: float,
    player_y: float,
    player_radius: float = 15.0,
) -> Optional[Enemy]:
    """First enemy touching the player ship, if any."""
    for enemy in enemies:
        if enemy.distance_to(player_x, player_y) < enemy.size + player_radius:
            return enemy
    return None
