"""
Session Module

Game orchestration: the state machine that owns a match.

Key Components:
    - GameSession: Applies moves, tracks history and captures, detects the
      end of the game, archives it, and runs the engine's turns
    - SessionConfig: Opponent color, cosmetic delay, defaults
    - EngineTask: Cancellable background engine turn
"""

from chess_companion.session.states import GameMode, SessionState
from chess_companion.session.config import SessionConfig
from chess_companion.session.task import EngineTask
from chess_companion.session.game import GameSession

__all__ = ['GameMode', 'SessionState', 'SessionConfig', 'EngineTask', 'GameSession']
