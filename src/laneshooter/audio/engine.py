"""
Lane Shooter audio engine - chiptune sound effects.

Three effects cover the whole game: a laser shot, an enemy burst and a
game-over fall. Each is loaded from ``<sounds_path>/<name>.wav`` when such a
file exists, otherwise synthesized at startup.

Playback is strictly best-effort. Failing to initialize the mixer or to play
a sound is logged and otherwise ignored; it never reaches the game.
"""

import array
import logging
import math
import random
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pygame

from laneshooter.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

SHOOT = "shoot"
LASER_DESTROY = "laser_destroy"
GAME_OVER = "game_over"


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


class AudioEngine:
    """Sound effects bound to gameplay notifications."""

    def __init__(self, sounds_path: Optional[Path] = None) -> None:
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._sounds_path = sounds_path
        self._volume = 1.0
        self._muted = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and prepare sounds."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
        except pygame.error as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._initialized = True
        for name, generate in (
            (SHOOT, self._gen_shoot),
            (LASER_DESTROY, self._gen_destroy),
            (GAME_OVER, self._gen_game_over),
        ):
            self._sounds[name] = self._load(name) or generate()

        logger.info(f"Audio engine initialized with {len(self._sounds)} sounds")
        return True

    def _load(self, name: str) -> Optional[pygame.mixer.Sound]:
        if self._sounds_path is None:
            return None
        path = self._sounds_path / f"{name}.wav"
        if not path.exists():
            return None
        try:
            return pygame.mixer.Sound(str(path))
        except pygame.error as e:
            logger.warning(f"Could not load {path}: {e}")
            return None

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    # ===== SOUND SYNTHESIS =====

    def _gen_shoot(self) -> pygame.mixer.Sound:
        """Short falling laser zap."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.12)):
            t = i / SAMPLE_RATE
            freq = 1400 - t * 8000
            env = max(0, 1 - t * 8)
            val = square(t, freq) * 0.25
            samples.append(int(val * env * 32767))
        return self._create_sound(samples)

    def _gen_destroy(self) -> pygame.mixer.Sound:
        """Noise burst over a low thump."""
        samples = array.array('h')
        for i in range(int(SAMPLE_RATE * 0.25)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t * 4)
            val = noise() * 0.35 + sine(t, 110 - t * 200) * 0.3
            samples.append(int(val * env * 32767 * 0.8))
        return self._create_sound(samples)

    def _gen_game_over(self) -> pygame.mixer.Sound:
        """Three descending notes."""
        samples = array.array('h')
        notes = [392, 311, 196]
        for i in range(int(SAMPLE_RATE * 0.9)):
            t = i / SAMPLE_RATE
            note_idx = min(int(t / 0.3), 2)
            env = max(0, 1 - (t - note_idx * 0.3) * 2.5)
            val = square(t, notes[note_idx]) * 0.2 + sine(t, notes[note_idx] / 2) * 0.2
            samples.append(int(val * env * 32767))
        return self._create_sound(samples)

    # ===== PLAYBACK API =====

    def play(self, sound_name: str) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect. Never raises."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        try:
            sound.stop()  # restart from the beginning
            sound.set_volume(self._volume)
            return sound.play()
        except pygame.error as e:
            logger.error(f"Audio play error ({sound_name}): {e}")
            return None

    def play_shoot(self) -> None:
        self.play(SHOOT)

    def play_destroy(self) -> None:
        self.play(LASER_DESTROY)

    def play_game_over(self) -> None:
        self.play(GAME_OVER)

    def attach(self, event_bus: EventBus) -> List[Callable[[], None]]:
        """Subscribe to gameplay notifications. Returns unsubscribe functions."""
        def on_fire(event: Event) -> None:
            self.play_shoot()

        def on_destroyed(event: Event) -> None:
            self.play_destroy()

        def on_hit(event: Event) -> None:
            self.play_game_over()

        return [
            event_bus.subscribe(EventType.FIRE, on_fire),
            event_bus.subscribe(EventType.ENEMY_DESTROYED, on_destroyed),
            event_bus.subscribe(EventType.PLAYER_HIT, on_hit),
        ]

    def set_volume(self, volume: float) -> None:
        """Set volume (0.0 - 1.0)."""
        self._volume = max(0.0, min(1.0, volume))

    def get_volume(self) -> float:
        return self._volume

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._sounds.clear()
            logger.info("Audio engine cleaned up")


# Global audio engine instance
_audio_engine: Optional[AudioEngine] = None


def get_audio_engine(sounds_path: Optional[Path] = None) -> AudioEngine:
    """Get the global audio engine instance."""
    global _audio_engine
    if _audio_engine is None:
        _audio_engine = AudioEngine(sounds_path)
    return _audio_engine
