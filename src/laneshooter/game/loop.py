"""
Frame scheduling for the game.

``GameLoop`` asks a ``FrameScheduler`` for one frame at a time, the way a
browser's requestAnimationFrame works: each frame ticks the game once and
re-arms the next frame only while the session is still ACTIVE. A tick that
ends the game therefore leaves nothing scheduled.

While running, the loop also owns the input listeners for the game's
control scheme. ``stop()`` cancels the pending frame and detaches those
listeners; using the loop as a context manager guarantees it.
"""

from typing import Callable, Optional, Protocol
import logging

from laneshooter.core.events import Event, EventBus, EventType
from laneshooter.game.engine import Game
from laneshooter.game.input import ContinuousInput, DiscreteInput, LogicalKey

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Minimal requestAnimationFrame-style scheduling surface."""

    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class FrameQueue:
    """FrameScheduler driven by an external clock.

    Callbacks requested before ``run_pending`` are invoked once with the
    frame timestamp; callbacks requested while running wait for the next
    frame.
    """

    def __init__(self) -> None:
        self._callbacks: dict[int, FrameCallback] = {}
        self._next_handle = 1

    def __len__(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def run_pending(self, timestamp: float) -> int:
        """Run every callback scheduled so far. Returns how many ran."""
        due, self._callbacks = self._callbacks, {}
        for callback in due.values():
            callback(timestamp)
        return len(due)


class GameLoop:
    """Drives a ``Game`` from a ``FrameScheduler`` and routes input events."""

    def __init__(
        self,
        game: Game,
        scheduler: FrameScheduler,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.game = game
        self.scheduler = scheduler
        self.event_bus = event_bus or game.event_bus
        self._handle: Optional[int] = None
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def running(self) -> bool:
        """True while a frame is scheduled."""
        return self._handle is not None

    @property
    def listening(self) -> bool:
        return bool(self._unsubscribers)

    def start(self) -> None:
        """Start (or restart) the session and schedule the first frame."""
        self.game.start()
        self._attach_input()
        if self._handle is None:
            self._arm()

    def stop(self) -> None:
        """Cancel the pending frame and detach input listeners."""
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        self._detach_input()
        logger.info("Game loop stopped")

    def __enter__(self) -> "GameLoop":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _arm(self) -> None:
        self._handle = self.scheduler.request_frame(self._on_frame)

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None
        self.game.tick(timestamp)
        if self.game.session.is_active:
            self._arm()
        else:
            logger.info(f"Game loop halted: {self.game.status.name}")

    # Input routing

    def _attach_input(self) -> None:
        if self._unsubscribers:
            return

        source = self.game.input
        bus = self.event_bus
        if isinstance(source, DiscreteInput):
            self._unsubscribers = [
                bus.subscribe(EventType.KEY_DOWN, self._on_key_down),
                bus.subscribe(EventType.KEY_UP, self._on_key_up),
            ]
        elif isinstance(source, ContinuousInput):
            self._unsubscribers = [
                bus.subscribe(EventType.TOUCH_START, self._on_touch_start),
                bus.subscribe(EventType.TOUCH_MOVE, self._on_touch_move),
                bus.subscribe(EventType.TOUCH_END, self._on_touch_end),
            ]
        logger.debug(f"Attached {len(self._unsubscribers)} input listeners")

    def _detach_input(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_key_down(self, event: Event) -> None:
        key = event.data.get("key")
        if isinstance(key, LogicalKey):
            self.game.input.key_down(key)

    def _on_key_up(self, event: Event) -> None:
        key = event.data.get("key")
        if isinstance(key, LogicalKey):
            self.game.input.key_up(key)

    def _on_touch_start(self, event: Event) -> None:
        self.game.input.touch_start(float(event.data.get("x", 0.0)))

    def _on_touch_move(self, event: Event) -> None:
        self.game.input.touch_move(float(event.data.get("x", 0.0)))

    def _on_touch_end(self, event: Event) -> None:
        self.game.input.touch_end()
