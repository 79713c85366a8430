"""
Unified input for keyboard and touch control schemes.

Both schemes boil down to the same two logical signals per tick: lane-change
steps and a fire intent. Events may arrive at any time between ticks; they
only mutate the recorded state here and are consumed by ``poll()`` at the
start of the next tick.

Discrete mode (keyboard):
    LANE_LEFT / LANE_RIGHT held -> one lane step, at most every
    ``lane_debounce`` time-units. FIRE held -> one shot once the scaled
    cooldown has passed. Lane changes and shots share a single
    last-action timestamp, so moving also restarts the fire cooldown.

Continuous mode (touch):
    A horizontal drag beyond ``touch_threshold`` from the drag origin is one
    lane step; the origin then jumps to the current touch point. While a
    finger is down, fire is asserted every time the cooldown allows.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
import logging

from laneshooter.config.settings import TimingSettings

logger = logging.getLogger(__name__)


class InputMode(Enum):
    """Control scheme, fixed for the lifetime of a game."""
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class LogicalKey(Enum):
    """Keys the core understands. Adapters map physical keys onto these."""
    LANE_LEFT = auto()
    LANE_RIGHT = auto()
    FIRE = auto()


@dataclass(frozen=True)
class Intents:
    """Input consumed by one tick."""
    lane_steps: tuple[int, ...] = ()
    fire: bool = False


NO_INTENTS = Intents()


class InputSource(ABC):
    """Base class for both control schemes."""

    mode: InputMode

    def __init__(self, timing: TimingSettings | None = None) -> None:
        self.timing = timing or TimingSettings()

    @abstractmethod
    def poll(self, timestamp: float, fire_cooldown: float) -> Intents:
        """Consume recorded input for the tick at ``timestamp``."""

    @abstractmethod
    def reset(self) -> None:
        """Forget timers from a previous session."""


class DiscreteInput(InputSource):
    """Held-key tracking with a shared lane/fire debounce."""

    mode = InputMode.DISCRETE

    def __init__(self, timing: TimingSettings | None = None) -> None:
        super().__init__(timing)
        self._held: set[LogicalKey] = set()
        self._last_action = 0.0

    @property
    def held(self) -> frozenset[LogicalKey]:
        return frozenset(self._held)

    @property
    def last_action(self) -> float:
        return self._last_action

    def key_down(self, key: LogicalKey) -> None:
        self._held.add(key)

    def key_up(self, key: LogicalKey) -> None:
        self._held.discard(key)

    def release_all(self) -> None:
        self._held.clear()

    def reset(self) -> None:
        # Held keys survive a restart, only the clock starts over
        self._last_action = 0.0

    def poll(self, timestamp: float, fire_cooldown: float) -> Intents:
        steps: list[int] = []
        debounce = self.timing.lane_debounce

        if LogicalKey.LANE_LEFT in self._held and timestamp - self._last_action >= debounce:
            steps.append(-1)
            self._last_action = timestamp
        if LogicalKey.LANE_RIGHT in self._held and timestamp - self._last_action >= debounce:
            steps.append(1)
            self._last_action = timestamp

        # Inclusive: a shot may land exactly one cooldown after the last action
        fire = False
        if LogicalKey.FIRE in self._held and timestamp - self._last_action >= fire_cooldown:
            fire = True
            self._last_action = timestamp

        if not steps and not fire:
            return NO_INTENTS
        return Intents(lane_steps=tuple(steps), fire=fire)


class ContinuousInput(InputSource):
    """Drag-to-switch lanes, hold-to-fire."""

    mode = InputMode.CONTINUOUS

    def __init__(self, timing: TimingSettings | None = None) -> None:
        super().__init__(timing)
        self._touching = False
        self._origin_x = 0.0
        self._pending: list[int] = []
        self._last_fire = 0.0

    @property
    def touching(self) -> bool:
        return self._touching

    @property
    def origin_x(self) -> float:
        return self._origin_x

    def touch_start(self, x: float) -> None:
        self._touching = True
        self._origin_x = x

    def touch_move(self, x: float) -> None:
        if not self._touching:
            return

        delta = x - self._origin_x
        if abs(delta) > self.timing.touch_threshold:
            self._pending.append(-1 if delta < 0 else 1)
            self._origin_x = x

    def touch_end(self) -> None:
        self._touching = False

    def reset(self) -> None:
        self._pending.clear()
        self._last_fire = 0.0

    def poll(self, timestamp: float, fire_cooldown: float) -> Intents:
        steps = tuple(self._pending)
        self._pending.clear()

        # Inclusive, same boundary as the keyboard scheme
        fire = False
        if self._touching and timestamp - self._last_fire >= fire_cooldown:
            fire = True
            self._last_fire = timestamp

        if not steps and not fire:
            return NO_INTENTS
        return Intents(lane_steps=steps, fire=fire)


def classify_device(viewport_width: int, breakpoint: int = 768) -> InputMode:
    """Narrow viewports are treated as touch devices."""
    return InputMode.CONTINUOUS if viewport_width <= breakpoint else InputMode.DISCRETE


def create_input(mode: InputMode, timing: TimingSettings | None = None) -> InputSource:
    """Create the input source for a control scheme."""
    if mode is InputMode.CONTINUOUS:
        source: InputSource = ContinuousInput(timing)
    else:
        source = DiscreteInput(timing)
    logger.info(f"Input mode: {mode.value}")
    return source
