"""
Board Module

The rules engine collaborator. Everything the core knows about chess
rules (legality, SAN, FEN/PGN, checkmate and draw detection) goes through
RulesEngine, which delegates to python-chess.

Data Flow:
    (from, to) squares → RulesEngine.find_move() → chess.Move
    chess.Move → RulesEngine.apply() → AppliedMove (SAN, capture, FENs)
"""

from chess_companion.board.rules import (
    AppliedMove,
    InvalidMove,
    MatchResult,
    RulesEngine,
    parse_square,
)

__all__ = ['AppliedMove', 'InvalidMove', 'MatchResult', 'RulesEngine', 'parse_square']
