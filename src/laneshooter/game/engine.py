"""
The game actor: owns the session, the input source and the random source.

Adapters talk to ``Game`` only: they feed input, call ``start()`` and
``tick()``, read snapshots, and listen on the event bus for gameplay
notifications (FIRE, ENEMY_DESTROYED, PLAYER_HIT). Listeners are optional;
the simulation never depends on them.
"""

from dataclasses import replace
import logging
import random
from typing import Optional

from laneshooter.config.settings import Settings, get_settings
from laneshooter.core.events import Event, EventBus, EventType
from laneshooter.core.state import SessionStatus
from laneshooter.game.difficulty import difficulty_for
from laneshooter.game.input import InputMode, InputSource, create_input
from laneshooter.game.session import (
    Session,
    TickOutcome,
    World,
    advance,
    clamp_lane,
    start_session,
)
from laneshooter.game.snapshot import Snapshot, take_snapshot
from laneshooter.game.spawner import Spawner

logger = logging.getLogger(__name__)


class Game:
    """Single-player lane shooter session owner."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
        input_mode: InputMode = InputMode.DISCRETE,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.event_bus = event_bus or EventBus()
        self.world = World.from_settings(self.settings)

        if seed is None:
            seed = self.settings.seed
        self.rng = random.Random(seed)

        self.input: InputSource = create_input(input_mode, self.settings.timing)
        self.spawner = Spawner(
            self.world.lanes,
            self.rng,
            entities=self.settings.entities,
            timing=self.settings.timing,
        )
        self._session = Session(points_per_level=self.settings.difficulty.points_per_level)

        logger.info(f"Game created (input={input_mode.value}, seed={seed})")

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def difficulty_level(self) -> int:
        return self._session.difficulty_level

    @property
    def input_mode(self) -> InputMode:
        return self.input.mode

    def fire_cooldown(self) -> float:
        """Scaled fire cooldown for the current score."""
        difficulty = difficulty_for(self._session.score, self.settings.difficulty)
        return self.settings.timing.fire_cooldown * difficulty.fire_cooldown_multiplier

    def start(self) -> Snapshot:
        """Start or restart a session."""
        old_status = self._session.status
        self._session = start_session(self._session)
        self.input.reset()

        logger.info(f"Session started ({old_status.name} -> ACTIVE)")
        self._emit(EventType.SESSION_STARTED, {"previous": old_status.name})
        self._emit(EventType.STATE_CHANGED, {"from": old_status.name, "to": SessionStatus.ACTIVE.name})
        return self.snapshot()

    def tick(self, timestamp: float) -> Snapshot:
        """Advance one frame. A no-op unless the session is ACTIVE."""
        if not self._session.is_active:
            return self.snapshot()

        intents = self.input.poll(timestamp, self.fire_cooldown())
        outcome = advance(self._session, intents, timestamp, self.world, self.spawner)
        self._session = outcome.session
        self._notify(outcome)
        return self.snapshot()

    def move_to_lane(self, index: int) -> None:
        """Put the player in a lane, clamping out-of-range indices."""
        if not self._session.is_active:
            return
        lane = clamp_lane(index, self.world.lanes)
        if lane != index:
            logger.warning(f"Lane {index} out of range, clamped to {lane}")
        self._session = replace(self._session, lane=lane)

    def snapshot(self) -> Snapshot:
        return take_snapshot(self._session, self.world)

    def _notify(self, outcome: TickOutcome) -> None:
        if outcome.fired is not None:
            p = outcome.fired
            self._emit(EventType.FIRE, {"projectile_id": p.id, "x": p.x, "y": p.y})

        if outcome.hit is not None:
            self._emit(EventType.ENEMY_DESTROYED, {
                "enemy_id": outcome.hit.enemy.id,
                "projectile_id": outcome.hit.projectile.id,
                "score": outcome.session.score,
            })

        if outcome.crashed is not None:
            score = outcome.session.score
            logger.info(f"Player hit by enemy {outcome.crashed.id}, game over at score {score}")
            self._emit(EventType.PLAYER_HIT, {"enemy_id": outcome.crashed.id, "score": score})
            self._emit(EventType.STATE_CHANGED, {
                "from": SessionStatus.ACTIVE.name,
                "to": SessionStatus.GAME_OVER.name,
            })

    def _emit(self, event_type: EventType, data: dict) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="game"))
