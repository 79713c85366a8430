"""Per-tick entity motion and out-of-bounds pruning."""

from laneshooter.game.entities import Enemy, Projectile


def advance_projectiles(projectiles: tuple[Projectile, ...], speed: float) -> tuple[Projectile, ...]:
    """Move projectiles up by ``speed``; drop those above the top edge."""
    moved = (p.moved(-speed) for p in projectiles)
    return tuple(p for p in moved if p.y >= 0)


def advance_enemies(enemies: tuple[Enemy, ...], height: float) -> tuple[Enemy, ...]:
    """Move enemies down by their own speed; drop those past the bottom edge."""
    moved = (e.moved() for e in enemies)
    return tuple(e for e in moved if e.y < height)
