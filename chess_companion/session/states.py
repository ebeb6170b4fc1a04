"""Enumerations describing a game session."""

from enum import Enum


class GameMode(Enum):
    """Who the human is playing against."""

    VS_ENGINE = "ai"
    LOCAL = "local"


class SessionState(Enum):
    """
    Lifecycle of a session.

        IDLE --start_new_game--> IN_PROGRESS --checkmate/draw--> TERMINAL

    start_new_game() returns to IN_PROGRESS from any state.
    """

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    TERMINAL = "terminal"
