"""
Main entry point for Lane Shooter.

Loads configuration, sets up logging, picks the control scheme and runs the
pygame window.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from laneshooter.config.settings import Settings, get_settings
from laneshooter.core.events import Event, EventBus
from laneshooter.game.engine import Game
from laneshooter.game.input import InputMode, classify_device


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure logging with console and optional file output."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Per-spawn debug lines are noisy even in debug runs
    logging.getLogger("laneshooter.game.spawner").setLevel(logging.INFO)


def attach_event_logger(event_bus: EventBus) -> Callable[[], None]:
    """Log every bus event at DEBUG. Returns the unsubscribe function."""
    logger = logging.getLogger("laneshooter.events")

    def log_event(event: Event) -> None:
        logger.debug(f"{event.type} from {event.source}: {event.data}")

    return event_bus.subscribe_all(log_event)


def resolve_input_mode(settings: Settings) -> InputMode:
    """Pick the control scheme, classifying the display when set to auto."""
    if settings.input_mode != "auto":
        return InputMode(settings.input_mode)

    import pygame

    logger = logging.getLogger(__name__)
    try:
        pygame.display.init()
        width = pygame.display.Info().current_w
    except pygame.error as e:
        logger.warning(f"Could not query display size, defaulting to keyboard: {e}")
        return InputMode.DISCRETE

    mode = classify_device(width, settings.display.mobile_breakpoint)
    logger.info(f"Display width {width}px -> {mode.value} input")
    return mode


async def run(settings: Settings) -> None:
    """Build the game and run the window until it closes."""
    from laneshooter.audio.engine import get_audio_engine
    from laneshooter.simulator.window import SimulatorWindow, WindowConfig

    event_bus = EventBus()
    if settings.debug:
        attach_event_logger(event_bus)
    game = Game(settings=settings, event_bus=event_bus, input_mode=resolve_input_mode(settings))

    audio = get_audio_engine(settings.sounds_path)
    if settings.audio_enabled and audio.init():
        audio.attach(event_bus)

    display = settings.display
    window = SimulatorWindow(
        game,
        config=WindowConfig(
            width=display.window_width,
            height=display.window_height,
            fullscreen=display.fullscreen,
            fps=display.fps,
            scale=display.scale,
        ),
        event_bus=event_bus,
        on_toggle_mute=audio.toggle_mute,
    )

    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("Lane Shooter starting...")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Lane Shooter stopped")


if __name__ == "__main__":
    main()
