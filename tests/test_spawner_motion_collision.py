import random

import pytest

from laneshooter.game.collision import find_player_collision, resolve_projectile_hit
from laneshooter.game.difficulty import difficulty_for
from laneshooter.game.entities import Enemy, Projectile
from laneshooter.game.lanes import LaneModel
from laneshooter.game.motion import advance_enemies, advance_projectiles
from laneshooter.game.spawner import Spawner


def make_enemy(id=1, x=50.0, y=100.0, size=20.0, speed=1.0, lane=0):
    return Enemy(id=id, lane=lane, x=x, y=y, size=size, speed=speed)


class TestSpawner:
    def test_interval_gate(self, spawner):
        level1 = difficulty_for(0)
        assert not spawner.due(500, 0, level1)
        assert spawner.due(501, 0, level1)

    def test_interval_shrinks_with_level(self, spawner):
        level2 = difficulty_for(10)
        assert spawner.interval(level2) == pytest.approx(500 / 1.2)
        assert spawner.due(417, 0, level2)
        assert not spawner.due(416, 0, level2)

    def test_spawned_enemy_attributes(self, spawner):
        level1 = difficulty_for(0)
        for enemy_id in range(200):
            enemy = spawner.spawn(enemy_id, level1)
            assert enemy.id == enemy_id
            assert enemy.y == 0
            assert enemy.x == spawner.lanes.center_x(enemy.lane)
            assert 15 <= enemy.size < 25
            assert 1 <= enemy.speed < 3

    def test_speed_scales_with_difficulty(self, spawner):
        level3 = difficulty_for(20)
        speeds = [spawner.spawn(i, level3).speed for i in range(200)]
        assert all(1.6 <= s < 4.8 for s in speeds)

    def test_every_lane_is_used(self, spawner):
        lanes = {spawner.spawn(i, difficulty_for(0)).lane for i in range(200)}
        assert lanes == {0, 1, 2, 3}

    def test_seeded_spawns_are_reproducible(self):
        lanes = LaneModel(400)
        a = Spawner(lanes, random.Random(7))
        b = Spawner(lanes, random.Random(7))
        level = difficulty_for(0)
        assert [a.spawn(i, level) for i in range(20)] == [b.spawn(i, level) for i in range(20)]


class TestMotion:
    def test_projectiles_move_up(self):
        moved = advance_projectiles((Projectile(1, 50, 100),), 7)
        assert moved == (Projectile(1, 50, 93),)

    def test_projectile_removed_only_below_zero(self):
        kept = advance_projectiles((Projectile(1, 50, 7),), 7)
        assert kept == (Projectile(1, 50, 0),)
        assert advance_projectiles(kept, 7) == ()

    def test_projectile_y_strictly_decreases_until_removed(self):
        projectiles = (Projectile(1, 50, 330),)
        last_y = 330
        while projectiles:
            projectiles = advance_projectiles(projectiles, 7)
            if projectiles:
                assert projectiles[0].y < last_y
                assert projectiles[0].y >= 0
                last_y = projectiles[0].y
        assert last_y - 7 < 0

    def test_enemies_move_by_own_speed(self):
        enemies = (make_enemy(1, speed=1.5), make_enemy(2, speed=2.5))
        moved = advance_enemies(enemies, 400)
        assert [e.y for e in moved] == [101.5, 102.5]

    def test_enemy_removed_at_bottom_edge(self):
        assert advance_enemies((make_enemy(y=397.5, speed=2),), 400)[0].y == 399.5
        assert advance_enemies((make_enemy(y=398, speed=2),), 400) == ()


class TestProjectileHits:
    def test_hit_within_radius(self):
        enemy = make_enemy(1, x=50, y=100)
        projectile = Projectile(2, 50, 110)
        hit = resolve_projectile_hit((projectile,), (enemy,))
        assert hit is not None
        assert hit.enemy == enemy
        assert hit.projectile == projectile
        assert hit.enemies == ()
        assert hit.projectiles == ()

    def test_distance_equal_to_radius_misses(self):
        enemy = make_enemy(1, x=50, y=100, size=20)
        assert resolve_projectile_hit((Projectile(2, 50, 120),), (enemy,)) is None

    def test_only_one_pair_resolves_newest_first(self):
        e1 = make_enemy(1, x=50, y=100)
        e2 = make_enemy(2, x=150, y=100, lane=1)
        p1 = Projectile(3, 50, 100)
        p2 = Projectile(4, 150, 105)
        p3 = Projectile(5, 150, 95)

        hit = resolve_projectile_hit((p1, p2, p3), (e1, e2))
        assert hit.enemy == e2
        assert hit.projectile == p3
        assert hit.enemies == (e1,)
        assert hit.projectiles == (p1, p2)

    def test_no_enemies(self):
        assert resolve_projectile_hit((Projectile(1, 50, 50),), ()) is None


class TestPlayerCollision:
    def test_contact(self):
        enemy = make_enemy(x=50, y=320, size=20)
        assert find_player_collision((enemy,), 50, 350) == enemy

    def test_just_out_of_reach(self):
        enemy = make_enemy(x=50, y=315, size=20)
        assert find_player_collision((enemy,), 50, 350) is None

    def test_neighbouring_lane_is_safe(self):
        enemy = make_enemy(x=150, y=350, size=24.9, lane=1)
        assert find_player_collision((enemy,), 50, 350) is None
