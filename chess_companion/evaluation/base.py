"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, the search and the move classifier can
use any evaluator without modification.

Key Principles:
    1. Evaluators are stateless and side-effect free
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Terminal positions are not special-cased here; the search detects
       checkmate and stalemate itself

Convention:
    - Material values in centipawns (1/100th of a pawn, pawn = 100, queen = 900)
    - Return 0 for perfectly balanced positions (the starting position)
"""

from abc import ABC, abstractmethod

import chess


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method.
    """

    @abstractmethod
    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate a chess position from White's perspective.

        Args:
            board: python-chess Board object to evaluate

        Returns:
            int: Evaluation in centipawns
        """
        pass

    def __call__(self, board: chess.Board) -> int:
        return self.evaluate(board)

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
