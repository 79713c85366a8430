"""
Session lifecycle states for Lane Shooter.

States:
    IDLE: Created, nothing on the field, waiting for start()
    ACTIVE: Ticks advance the simulation
    GAME_OVER: An enemy reached the player; waits for start()
"""

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Session states."""
    IDLE = auto()
    ACTIVE = auto()
    GAME_OVER = auto()


class InvalidTransitionError(Exception):
    """Raised when a session is moved along an edge not in the table."""

    def __init__(self, from_state: SessionStatus, to_state: SessionStatus) -> None:
        super().__init__(f"Invalid transition: {from_state.name} -> {to_state.name}")
        self.from_state = from_state
        self.to_state = to_state


# Valid state transitions
VALID_TRANSITIONS: frozenset[tuple[SessionStatus, SessionStatus]] = frozenset([
    # start()
    (SessionStatus.IDLE, SessionStatus.ACTIVE),
    (SessionStatus.ACTIVE, SessionStatus.ACTIVE),  # Restart mid-game
    (SessionStatus.GAME_OVER, SessionStatus.ACTIVE),  # Play again

    # Player hit
    (SessionStatus.ACTIVE, SessionStatus.GAME_OVER),
])


def can_transition(from_state: SessionStatus, to_state: SessionStatus) -> bool:
    """Check if transition between two states is valid."""
    return (from_state, to_state) in VALID_TRANSITIONS


def check_transition(from_state: SessionStatus, to_state: SessionStatus) -> SessionStatus:
    """
    Validate a transition and return the target state.

    Raises:
        InvalidTransitionError: if the edge is not in VALID_TRANSITIONS
    """
    if not can_transition(from_state, to_state):
        logger.warning(f"Invalid transition: {from_state.name} -> {to_state.name}")
        raise InvalidTransitionError(from_state, to_state)
    return to_state
