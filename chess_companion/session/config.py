"""
Game session configuration.
"""

from dataclasses import dataclass
from typing import Optional

import chess

from chess_companion.board.rules import PROMOTION_PIECES
from chess_companion.search.engine import Difficulty
from chess_companion.session.states import GameMode


@dataclass
class SessionConfig:
    """Configuration for a GameSession.

    Keeps the orchestration knobs in one place so an app and its tests can
    differ only by config (e.g. zero engine delay and a fixed seed).
    """

    # Opponent
    engine_color: chess.Color = chess.BLACK
    """Color played by the built-in opponent in vs-engine mode"""

    engine_delay: float = 0.6
    """Seconds to wait before the engine starts thinking (cosmetic)"""

    seed: Optional[int] = None
    """Seed for the root move shuffle (None for a random game each time)"""

    # Rules
    default_promotion: chess.PieceType = chess.QUEEN
    """Piece a pawn promotes to when the caller does not choose one"""

    # New game defaults
    default_mode: GameMode = GameMode.VS_ENGINE
    """Mode used by start_new_game() when none is given"""

    default_difficulty: Difficulty = Difficulty.MEDIUM
    """Difficulty used by start_new_game() when none is given"""

    # Archive labels
    player_two_label: str = "Player 2"
    """Opponent name stored for local two-player matches"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.default_mode = GameMode(self.default_mode)
        self.default_difficulty = Difficulty(self.default_difficulty)

        if self.engine_color not in (chess.WHITE, chess.BLACK):
            raise ValueError(f"engine_color must be chess.WHITE or chess.BLACK, got {self.engine_color}")

        if self.engine_delay < 0:
            raise ValueError(f"engine_delay must be non-negative, got {self.engine_delay}")

        if self.default_promotion not in PROMOTION_PIECES:
            raise ValueError(
                f"default_promotion must be a queen, rook, bishop or knight, got {self.default_promotion}"
            )

    def opponent_label(self, mode: GameMode, difficulty: Difficulty) -> str:
        if mode == GameMode.VS_ENGINE:
            return f"Computer ({difficulty.value})"
        return self.player_two_label
