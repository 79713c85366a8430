import dataclasses

import pytest

from laneshooter.core.events import EventBus, EventType
from laneshooter.core.state import SessionStatus
from laneshooter.game.engine import Game
from laneshooter.game.input import InputMode, LogicalKey


@pytest.fixture
def game(settings, event_bus):
    return Game(settings=settings, event_bus=event_bus, seed=42)


def collect(bus, event_type):
    events = []
    bus.subscribe(event_type, events.append)
    return events


def play(game, until, step=16.0, start=16.0):
    t = start
    while t <= until:
        game.tick(t)
        t += step


class TestLifecycle:
    def test_new_game_is_idle(self, game):
        assert game.status is SessionStatus.IDLE
        snap = game.snapshot()
        assert not snap.is_active
        assert snap.projectiles == ()
        assert snap.enemies == ()

    def test_tick_before_start_changes_nothing(self, game):
        game.input.key_down(LogicalKey.FIRE)
        before = game.session
        game.tick(10_000)
        assert game.session is before

    def test_start_emits_state_change(self, game, event_bus):
        changes = collect(event_bus, EventType.STATE_CHANGED)
        started = collect(event_bus, EventType.SESSION_STARTED)

        snap = game.start()
        assert snap.is_active
        assert snap.lane == 1
        assert snap.player_x == 150
        assert snap.player_y == 350
        assert len(started) == 1
        assert changes[0].data == {"from": "IDLE", "to": "ACTIVE"}

    def test_move_to_lane_clamps(self, game):
        game.start()
        game.move_to_lane(7)
        assert game.session.lane == 3
        game.move_to_lane(-2)
        assert game.session.lane == 0
        game.move_to_lane(2)
        assert game.snapshot().player_x == 250


class TestFiring:
    def test_held_fire_respects_cooldown(self, game, event_bus):
        shots = collect(event_bus, EventType.FIRE)
        game.start()
        game.input.key_down(LogicalKey.FIRE)

        play(game, 3000, step=50, start=50)
        assert len(shots) == 10
        assert shots[0].data["x"] == 150
        assert shots[0].data["y"] == 330

    def test_lane_change_suppresses_fire(self, game, event_bus):
        shots = collect(event_bus, EventType.FIRE)
        game.start()
        game.input.key_down(LogicalKey.LANE_LEFT)
        game.input.key_down(LogicalKey.FIRE)

        play(game, 2000, step=50, start=50)
        assert shots == []
        assert game.session.lane == 0

    def test_cooldown_shrinks_at_level_two(self, game, event_bus):
        shots = collect(event_bus, EventType.FIRE)
        game.start()
        game.input.key_down(LogicalKey.FIRE)
        game._session = dataclasses.replace(game.session, score=10)
        assert game.fire_cooldown() == pytest.approx(300 / 1.06)

        game.tick(280)
        assert shots == []
        game.tick(284)
        assert len(shots) == 1
        game.tick(564)
        assert len(shots) == 1
        game.tick(568)
        assert len(shots) == 2

    def test_failing_listener_does_not_break_tick(self, game, event_bus):
        def explode(event):
            raise RuntimeError("listener failure")

        event_bus.subscribe(EventType.FIRE, explode)
        shots = collect(event_bus, EventType.FIRE)
        game.start()
        game.input.key_down(LogicalKey.FIRE)

        snap = game.tick(300)
        assert len(shots) == 1
        assert len(snap.projectiles) == 1


class TestFullGame:
    def test_game_eventually_ends(self, game, event_bus):
        hits = collect(event_bus, EventType.PLAYER_HIT)
        game.start()

        t = 0.0
        while game.status is SessionStatus.ACTIVE and t < 600_000:
            t += 16.0
            game.tick(t)

        assert game.status is SessionStatus.GAME_OVER
        assert len(hits) == 1
        assert hits[0].data["score"] == game.score

        frozen = game.session
        game.tick(t + 16)
        assert game.session is frozen

    def test_restart_after_game_over(self, game):
        game.start()
        t = 0.0
        while game.status is SessionStatus.ACTIVE and t < 600_000:
            t += 16.0
            game.tick(t)

        snap = game.start()
        assert snap.is_active
        assert snap.score == 0
        assert snap.enemies == ()
        assert snap.projectiles == ()

    def test_seeded_games_replay_identically(self, settings):
        def record(seed):
            game = Game(settings=settings, event_bus=EventBus(), seed=seed)
            game.start()
            game.input.key_down(LogicalKey.FIRE)
            snaps = []
            for i in range(1, 400):
                if i == 100:
                    game.input.key_down(LogicalKey.LANE_RIGHT)
                if i == 110:
                    game.input.key_up(LogicalKey.LANE_RIGHT)
                snaps.append(game.tick(i * 16.0))
            return snaps

        assert record(5) == record(5)

    def test_enemy_destroyed_events_track_score(self, settings, event_bus):
        game = Game(settings=settings, event_bus=event_bus, seed=3)
        destroyed = collect(event_bus, EventType.ENEMY_DESTROYED)
        game.start()
        game.input.key_down(LogicalKey.FIRE)

        t = 0.0
        while game.status is SessionStatus.ACTIVE and t < 60_000:
            t += 16.0
            game.tick(t)

        assert len(destroyed) == game.score
        assert [e.data["score"] for e in destroyed] == list(range(1, game.score + 1))


class TestSnapshot:
    def test_snapshot_is_frozen(self, game):
        snap = game.start()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.score = 99

    def test_to_dict(self, game):
        game.start()
        game.input.key_down(LogicalKey.FIRE)
        data = game.tick(300).to_dict()
        assert data["status"] == "ACTIVE"
        assert data["difficulty_level"] == 1
        assert data["projectiles"] == [{"id": 1, "x": 150.0, "y": 323.0}]
        assert set(data) == {
            "status", "score", "difficulty_level", "lane",
            "player_x", "player_y", "projectiles", "enemies",
        }

    def test_touch_mode_game(self, settings):
        game = Game(settings=settings, input_mode=InputMode.CONTINUOUS, seed=1)
        assert game.input_mode is InputMode.CONTINUOUS
        game.start()
        game.input.touch_start(100)
        game.input.touch_move(140)
        snap = game.tick(16)
        assert snap.lane == 2
