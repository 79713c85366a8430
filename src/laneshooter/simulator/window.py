"""
Desktop window for Lane Shooter using pygame.

The window is an adapter only: it translates keyboard, mouse and finger
events into logical input events on the bus, drives the frame queue with
pygame's millisecond clock, and draws the snapshot the game hands back.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
import pygame

from laneshooter.core.events import Event, EventBus, EventType
from laneshooter.core.state import SessionStatus
from laneshooter.game.engine import Game
from laneshooter.game.input import InputMode, LogicalKey
from laneshooter.game.loop import FrameQueue, GameLoop
from laneshooter.game.snapshot import Snapshot
from laneshooter.graphics.renderer import SceneRenderer

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1100
    height: int = 860
    title: str = "Lane Shooter"
    fullscreen: bool = False
    fps: int = 60

    # Playfield pixels are drawn at this scale
    scale: int = 2

    # Colors
    bg_color: tuple[int, int, int] = (236, 72, 153)
    panel_color: tuple[int, int, int] = (131, 24, 67)
    text_color: tuple[int, int, int] = (255, 255, 255)
    accent_color: tuple[int, int, int] = (251, 191, 36)


KEY_MAP: dict[int, LogicalKey] = {
    pygame.K_LEFT: LogicalKey.LANE_LEFT,
    pygame.K_RIGHT: LogicalKey.LANE_RIGHT,
    pygame.K_SPACE: LogicalKey.FIRE,
}

MOUSE_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP)

INFO_TEXT = [
    "Enemies pour down four lanes.",
    "Stop as many as you can",
    "before one reaches your ship.",
    "Every 10 hits the game speeds up.",
]


class SimulatorWindow:
    """
    Main window hosting the playfield.

    Keyboard Mapping:
        LEFT/RIGHT: Change lane (keyboard mode)
        SPACE: Fire (keyboard mode)
        ENTER: Start / play again
        I: Toggle info panel
        F1: Toggle debug panel
        M: Mute audio
        ESC/Q: Exit

    Mouse drag or finger drag acts as touch input in touch mode.
    """

    def __init__(
        self,
        game: Game,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
        renderer: SceneRenderer | None = None,
        on_toggle_mute: Callable[[], object] | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.game = game
        self.event_bus = event_bus or game.event_bus

        playfield = game.settings.playfield
        self._field_w = int(playfield.width)
        self._field_h = int(playfield.height)
        self.renderer = renderer or SceneRenderer(
            self._field_w, self._field_h, playfield.lane_count, seed=game.settings.seed
        )
        self._buffer = self.renderer.new_frame()

        self.frames = FrameQueue()
        self.loop = GameLoop(game, self.frames, self.event_bus)
        self._on_toggle_mute = on_toggle_mute

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._show_info = False
        self._mouse_down = False

        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._layout: dict[str, pygame.Rect] = {}

        logger.info("SimulatorWindow created")

    @property
    def touch_mode(self) -> bool:
        return self.game.input_mode is InputMode.CONTINUOUS

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)
        self._big_font = pygame.font.SysFont(None, 48)
        self._small_font = pygame.font.SysFont(None, 20)

        self._calculate_layout()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Calculate positions for all UI elements."""
        w, h = self.config.width, self.config.height
        field_w = self._field_w * self.config.scale
        field_h = self._field_h * self.config.scale

        field_x = (w - field_w) // 2
        field_y = max(90, (h - field_h) // 2)

        self._layout = {
            "field": pygame.Rect(field_x, field_y, field_w, field_h),
            "score": pygame.Rect(field_x, field_y - 60, field_w, 44),
            "hint": pygame.Rect(field_x, field_y + field_h + 12, field_w, 24),
            "debug": pygame.Rect(20, 20, 260, 360),
        }

    # Events

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)
            elif event.type == pygame.WINDOWFOCUSLOST and not self.touch_mode:
                # Key-up events are lost while unfocused
                self.game.input.release_all()
            elif self.touch_mode:
                self._handle_pointer(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_RETURN:
            self._start()
        elif key == pygame.K_i:
            self._show_info = not self._show_info
        elif key == pygame.K_F1:
            self._show_debug = not self._show_debug
        elif key == pygame.K_m:
            if self._on_toggle_mute:
                self._on_toggle_mute()
        elif key in KEY_MAP and not self.touch_mode:
            self.event_bus.emit(Event(EventType.KEY_DOWN, data={"key": KEY_MAP[key]}, source="keyboard"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        """Handle key release."""
        if event.key in KEY_MAP and not self.touch_mode:
            self.event_bus.emit(Event(EventType.KEY_UP, data={"key": KEY_MAP[event.key]}, source="keyboard"))

    def _handle_pointer(self, event: pygame.event.Event) -> None:
        """Mouse and finger events become touch start/move/end."""
        if event.type in MOUSE_EVENTS and getattr(event, "touch", False):
            # Synthesized from a finger event that is handled on its own
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._mouse_down = True
            self._touch_down(event.pos[0])
        elif event.type == pygame.MOUSEMOTION and self._mouse_down:
            self._emit_touch(EventType.TOUCH_MOVE, event.pos[0])
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._mouse_down = False
            self.event_bus.emit(Event(EventType.TOUCH_END, source="pointer"))
        elif event.type == pygame.FINGERDOWN:
            self._touch_down(event.x * self.config.width)
        elif event.type == pygame.FINGERMOTION:
            self._emit_touch(EventType.TOUCH_MOVE, event.x * self.config.width)
        elif event.type == pygame.FINGERUP:
            self.event_bus.emit(Event(EventType.TOUCH_END, source="pointer"))

    def _touch_down(self, screen_x: float) -> None:
        if self.game.status is not SessionStatus.ACTIVE:
            # Tapping the idle or game-over screen starts a new game
            self._start()
            return
        self._emit_touch(EventType.TOUCH_START, screen_x)

    def _emit_touch(self, event_type: EventType, screen_x: float) -> None:
        x = (screen_x - self._layout["field"].x) / self.config.scale
        self.event_bus.emit(Event(event_type, data={"x": x}, source="pointer"))

    def _start(self) -> None:
        self._show_info = False
        self.event_bus.clear_history()
        self.loop.start()

    def recent_events(self, limit: int = 5) -> list[str]:
        """Short descriptions of the latest bus events, newest last."""
        return [
            f"{event.type.name if isinstance(event.type, EventType) else event.type} ({event.source})"
            for event in self.event_bus.get_history(limit=limit)
        ]

    # Rendering

    def _render(self, snapshot: Snapshot) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        self._render_score(snapshot)
        self._render_field(snapshot)
        self._render_overlay(snapshot)
        self._render_hint()

        if self._show_info:
            self._render_info()
        if self._show_debug:
            self._render_debug_panel(snapshot)

        pygame.display.flip()

    def _render_field(self, snapshot: Snapshot) -> None:
        rect = self._layout["field"]
        self.renderer.render(snapshot, self._buffer)
        surface = pygame.surfarray.make_surface(np.ascontiguousarray(self._buffer.swapaxes(0, 1)))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, rect.size)
        self._screen.blit(surface, rect.topleft)

    def _render_score(self, snapshot: Snapshot) -> None:
        rect = self._layout["score"]
        score_surf = self._big_font.render(f" {snapshot.score} ", True, (0, 0, 0), self.config.accent_color)
        self._screen.blit(score_surf, score_surf.get_rect(midleft=rect.midleft))

        level_surf = self._font.render(f"LEVEL {snapshot.difficulty_level}", True, self.config.text_color)
        self._screen.blit(level_surf, level_surf.get_rect(midright=rect.midright))

    def _render_overlay(self, snapshot: Snapshot) -> None:
        """Start screen and game-over message."""
        if snapshot.is_active:
            return

        rect = self._layout["field"]
        if snapshot.status is SessionStatus.IDLE:
            shade = pygame.Surface(rect.size, pygame.SRCALPHA)
            shade.fill((0, 0, 0, 180))
            self._screen.blit(shade, rect.topleft)
            lines = ["Space Shooter", *self._control_lines(), "", "ENTER or tap to start"]
        else:
            lines = ["Game Over", "", "ENTER or tap to play again"]

        y = rect.centery - len(lines) * 18
        for i, line in enumerate(lines):
            font = self._big_font if i == 0 else self._font
            surf = font.render(line, True, self.config.text_color)
            self._screen.blit(surf, surf.get_rect(center=(rect.centerx, y)))
            y += 44 if i == 0 else 30

    def _control_lines(self) -> list[str]:
        if self.touch_mode:
            return ["Drag left/right to move", "Touch and hold to shoot"]
        return ["Arrow keys to change lanes", "Space to shoot"]

    def _render_hint(self) -> None:
        rect = self._layout["hint"]
        text = "Controls: " + ", ".join(line.lower() for line in self._control_lines())
        surf = self._small_font.render(text, True, (0, 0, 0))
        self._screen.blit(surf, surf.get_rect(midtop=rect.midtop))

    def _render_info(self) -> None:
        rect = self._layout["field"]
        panel = pygame.Rect(0, 0, 300, 40 + 26 * len(INFO_TEXT))
        panel.center = rect.center
        pygame.draw.rect(self._screen, self.config.panel_color, panel, border_radius=8)

        y = panel.y + 20
        for line in INFO_TEXT + ["(I to close)"]:
            surf = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(surf, (panel.x + 16, y))
            y += 24

    def _render_debug_panel(self, snapshot: Snapshot) -> None:
        """Render the debug information panel."""
        rect = self._layout["debug"]
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=5)

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Status: {snapshot.status.name}",
            f"Score: {snapshot.score}",
            f"Level: {snapshot.difficulty_level}",
            f"Lane: {snapshot.lane}",
            f"Projectiles: {len(snapshot.projectiles)}",
            f"Enemies: {len(snapshot.enemies)}",
            f"Input: {self.game.input_mode.value}",
            f"Loop: {'running' if self.loop.running else 'halted'}",
        ]
        lines += ["", "Recent events:", *self.recent_events()]

        y = rect.y + 10
        for line in lines:
            surf = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(surf, (rect.x + 10, y))
            y += 20

    # Main loop

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                # Scheduled game frames receive the millisecond clock
                self.frames.run_pending(float(pygame.time.get_ticks()))

                self._render(self.game.snapshot())

                if self._clock:
                    self._clock.tick(self.config.fps)
                self._frame_count += 1

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self.loop.stop()
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
