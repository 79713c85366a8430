import logging

import pygame
import pytest

from laneshooter.core.events import Event, EventType
from laneshooter.core.state import SessionStatus
from laneshooter.game.engine import Game
from laneshooter.game.input import InputMode
from laneshooter.main import attach_event_logger
from laneshooter.simulator.window import SimulatorWindow


@pytest.fixture
def window(settings, event_bus):
    game = Game(settings=settings, event_bus=event_bus, input_mode=InputMode.CONTINUOUS, seed=1)
    window = SimulatorWindow(game, event_bus=event_bus)
    window._calculate_layout()
    return window


def collect(bus, event_type):
    events = []
    bus.subscribe(event_type, events.append)
    return events


def finger(event_type, x=0.5):
    return pygame.event.Event(event_type, x=x, y=0.5, dx=0.0, dy=0.0, touch_id=0, finger_id=0)


def mouse(event_type, pos=(550, 400), touch=False):
    return pygame.event.Event(event_type, pos=pos, rel=(0, 0), button=1, buttons=(1, 0, 0), touch=touch)


class TestPointerInput:
    def test_touch_is_not_doubled_by_synthesized_mouse(self, window, event_bus):
        starts = collect(event_bus, EventType.TOUCH_START)
        ends = collect(event_bus, EventType.TOUCH_END)
        window._start()

        window._handle_pointer(finger(pygame.FINGERDOWN))
        window._handle_pointer(mouse(pygame.MOUSEBUTTONDOWN, touch=True))
        window._handle_pointer(finger(pygame.FINGERUP))
        window._handle_pointer(mouse(pygame.MOUSEBUTTONUP, touch=True))

        assert len(starts) == 1
        assert len(ends) == 1

    def test_tap_on_idle_screen_only_starts_the_game(self, window, event_bus):
        starts = collect(event_bus, EventType.TOUCH_START)

        window._handle_pointer(finger(pygame.FINGERDOWN))
        window._handle_pointer(mouse(pygame.MOUSEBUTTONDOWN, touch=True))

        assert window.game.status is SessionStatus.ACTIVE
        assert starts == []

    def test_real_mouse_maps_to_playfield(self, window, event_bus):
        starts = collect(event_bus, EventType.TOUCH_START)
        window._start()

        field = window._layout["field"]
        window._handle_pointer(mouse(pygame.MOUSEBUTTONDOWN, pos=(field.x + 400, 300)))

        assert len(starts) == 1
        assert starts[0].data["x"] == 400 / window.config.scale


class TestDebugInfo:
    def test_recent_events_start_fresh_on_restart(self, window, event_bus):
        event_bus.emit(Event(EventType.KEY_DOWN, source="keyboard"))
        window._start()

        assert window.recent_events() == ["SESSION_STARTED (game)", "STATE_CHANGED (game)"]

    def test_recent_events_are_limited(self, window, event_bus):
        for _ in range(8):
            event_bus.emit(Event(EventType.FIRE, source="game"))
        assert len(window.recent_events(limit=3)) == 3

    def test_event_logger(self, event_bus, caplog):
        unsubscribe = attach_event_logger(event_bus)
        with caplog.at_level(logging.DEBUG, logger="laneshooter.events"):
            event_bus.emit(Event(EventType.FIRE, {"projectile_id": 7}, source="game"))
        assert "projectile_id" in caplog.text

        unsubscribe()
        caplog.clear()
        with caplog.at_level(logging.DEBUG, logger="laneshooter.events"):
            event_bus.emit(Event(EventType.FIRE, source="game"))
        assert caplog.text == ""
