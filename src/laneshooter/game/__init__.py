"""Simulation core: lanes, difficulty, input, entities and the tick."""

from laneshooter.game.engine import Game
from laneshooter.game.input import InputMode, LogicalKey, Intents, classify_device
from laneshooter.game.lanes import LaneModel
from laneshooter.game.loop import FrameQueue, FrameScheduler, GameLoop
from laneshooter.game.session import Session, World, advance, start_session
from laneshooter.game.snapshot import Snapshot

__all__ = [
    "Game",
    "GameLoop",
    "FrameQueue",
    "FrameScheduler",
    "InputMode",
    "LogicalKey",
    "Intents",
    "classify_device",
    "LaneModel",
    "Session",
    "World",
    "advance",
    "start_session",
    "Snapshot",
]
