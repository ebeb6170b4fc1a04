"""
Evaluation Module

Position evaluation functions. Evaluators are SWAPPABLE: the search and
the move classifier work with any object implementing the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material + piece-square table evaluation

Data Flow:
    chess.Board → evaluator.evaluate() → int (centipawns)
                                          Positive = White advantage
                                          Negative = Black advantage
"""

from chess_companion.evaluation.base import Evaluator
from chess_companion.evaluation.classical import ClassicalEvaluator, PIECE_VALUES

__all__ = ['Evaluator', 'ClassicalEvaluator', 'PIECE_VALUES']
