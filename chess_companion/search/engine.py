"""
Search Engine Service

Wraps find_best_move behind the small interface GameSession depends on:
`search(board, difficulty) -> chess.Move | None`. The engine holds only
its evaluator and the random generator used to shuffle root moves, so a
session can be handed a seeded engine in tests and a free-running one in
production.
"""

import logging
from enum import Enum
from typing import Optional

import chess
import numpy as np

from chess_companion.evaluation.base import Evaluator
from chess_companion.evaluation.classical import ClassicalEvaluator
from chess_companion.search.minimax import SearchResult, StopCheck, find_best_move

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Strength of the built-in opponent."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def depth(self) -> int:
        return DIFFICULTY_DEPTH[self]


# Plies searched from the root position
DIFFICULTY_DEPTH = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
}


class SearchEngine:
    """
    Fixed-depth minimax opponent.

    Attributes:
        evaluator: Static evaluation used at the leaves
        rng: numpy Generator used to shuffle root moves
    """

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            evaluator: Position evaluator (default: ClassicalEvaluator)
            rng: Random generator for tie diversity (overrides seed)
            seed: Seed for a fresh generator when rng is not given
        """
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def analyse(
        self,
        board: chess.Board,
        difficulty: Difficulty,
        should_stop: Optional[StopCheck] = None,
    ) -> SearchResult:
        """Search `board` at the depth for `difficulty` and return full stats."""
        difficulty = Difficulty(difficulty)
        result = find_best_move(
            board,
            difficulty.depth,
            self.evaluator,
            rng=self.rng,
            should_stop=should_stop,
        )
        if result.move is None and not result.cancelled:
            logger.info(f"No legal moves in position {board.fen()}")
        return result

    def search(
        self,
        board: chess.Board,
        difficulty: Difficulty,
        should_stop: Optional[StopCheck] = None,
    ) -> Optional[chess.Move]:
        """
        Pick a move for the side to move.

        Returns:
            The chosen legal move, or None if there is none (terminal
            position) or the search was stopped
        """
        return self.analyse(board, difficulty, should_stop).move

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(evaluator={self.evaluator!r})"
