"""
Search Module

This module implements the built-in opponent: fixed-depth minimax with
alpha-beta pruning over the classical evaluator.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search on a private board copy
    - SearchEngine: Service object mapping a Difficulty to a search depth
"""

from chess_companion.search.minimax import (
    MATE_SCORE,
    SEARCH_BOUND,
    SearchResult,
    find_best_move,
    minimax,
)
from chess_companion.search.engine import DIFFICULTY_DEPTH, Difficulty, SearchEngine

__all__ = [
    'MATE_SCORE',
    'SEARCH_BOUND',
    'SearchResult',
    'find_best_move',
    'minimax',
    'DIFFICULTY_DEPTH',
    'Difficulty',
    'SearchEngine',
]
