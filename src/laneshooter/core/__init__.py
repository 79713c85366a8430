"""Core framework components for Lane Shooter."""

from .state import SessionStatus, InvalidTransitionError, can_transition
from .events import EventBus, Event, EventType

__all__ = [
    "SessionStatus",
    "InvalidTransitionError",
    "can_transition",
    "EventBus",
    "Event",
    "EventType",
]
