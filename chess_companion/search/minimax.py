"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm of the built-in opponent.
Minimax explores the game tree to a fixed depth, and alpha-beta pruning
skips branches that cannot change the result.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Move Ordering: Search forcing moves first so pruning happens earlier

Conventions:
    - White is ALWAYS the maximizing player, Black ALWAYS the minimizer,
      whichever color the computer happens to be playing.
    - A mated side scores MATE_SCORE against it; stalemate scores 0.
    - Window bounds start at +/-SEARCH_BOUND, wider than MATE_SCORE, so a
      genuine mate value is never cut off by the initial window.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import chess
import numpy as np

from chess_companion.evaluation.base import Evaluator

logger = logging.getLogger(__name__)

MATE_SCORE = 100000
SEARCH_BOUND = 100100

StopCheck = Callable[[], bool]


class SearchCancelled(Exception):
    """Raised inside the tree when should_stop() asks the search to unwind."""


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move: Best move found (None if no legal moves or cancelled)
        score: Minimax value of that move (White's perspective)
        nodes: Number of tree nodes visited
        depth: Depth searched, in plies from the root position
        cancelled: True if the search was stopped before finishing
    """

    move: Optional[chess.Move]
    score: int
    nodes: int
    depth: int
    cancelled: bool = False


def get_piece_value(piece_type: Optional[int]) -> int:
    """
    Get approximate piece value for move ordering.

    Args:
        piece_type: chess.PAWN, chess.KNIGHT, etc.

    Returns:
        Piece value in centipawns
    """
    values = {
        chess.PAWN: 100,
        chess.KNIGHT: 320,
        chess.BISHOP: 330,
        chess.ROOK: 500,
        chess.QUEEN: 900,
        chess.KING: 20000,
    }
    return values.get(piece_type, 0)


def order_moves(board: chess.Board, moves: List[chess.Move]) -> List[chess.Move]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    Only used below the root. Ordering changes how much gets pruned, never
    the value a node returns, so it has no effect on the move chosen.

    Ordering Priority:
        Promotions, captures (MVV-LVA), checks, then quiet moves

    Args:
        board: Current board position
        moves: List of legal moves to order

    Returns:
        Sorted list of moves (most forcing first)
    """

    def move_score(move: chess.Move) -> int:
        score = 0

        if board.is_capture(move):
            if board.is_en_passant(move):
                victim_value = get_piece_value(chess.PAWN)
            else:
                victim_value = get_piece_value(board.piece_type_at(move.to_square))
            attacker_value = get_piece_value(board.piece_type_at(move.from_square))

            # MVV-LVA: High victim value, low attacker value
            score = 10000 + (victim_value - attacker_value // 10)

        if move.promotion:
            score += 8000

        if board.gives_check(move):
            score += 5000

        return score

    return sorted(moves, key=move_score, reverse=True)


def minimax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    maximizing_player: bool,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
    should_stop: Optional[StopCheck] = None,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Recursively explores the game tree, assuming both players play
    optimally, and returns the value of the best line found. The board is
    mutated with push/pop and restored before returning.

    Args:
        board: Current chess position (a private working copy)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximizer is already assured of
        beta: Best score the minimizer is already assured of
        maximizing_player: True if White is to move at this node
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] to track nodes visited
        should_stop: Optional callable; when it returns True the search
            raises SearchCancelled and unwinds

    Returns:
        int: Value of the position in centipawns (White's perspective)
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if should_stop is not None and should_stop():
        raise SearchCancelled()

    # Base case: Reached leaf node
    if depth == 0:
        return evaluator.evaluate(board)

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        if board.is_check():
            return -MATE_SCORE if maximizing_player else MATE_SCORE
        return 0

    ordered_moves = order_moves(board, legal_moves)

    if maximizing_player:
        max_eval = -SEARCH_BOUND
        for move in ordered_moves:
            board.push(move)
            try:
                eval_score = minimax(
                    board,
                    depth - 1,
                    alpha,
                    beta,
                    False,
                    evaluator,
                    nodes_searched,
                    should_stop,
                )
            finally:
                board.pop()

            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: Minimizing player won't allow this branch
            if beta <= alpha:
                break

        return max_eval

    else:
        min_eval = SEARCH_BOUND
        for move in ordered_moves:
            board.push(move)
            try:
                eval_score = minimax(
                    board,
                    depth - 1,
                    alpha,
                    beta,
                    True,
                    evaluator,
                    nodes_searched,
                    should_stop,
                )
            finally:
                board.pop()

            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)

            # Alpha cutoff: Maximizing player won't allow this branch
            if beta <= alpha:
                break

        return min_eval


def find_best_move(
    board: chess.Board,
    depth: int,
    evaluator: Evaluator,
    rng: Optional[np.random.Generator] = None,
    should_stop: Optional[StopCheck] = None,
) -> SearchResult:
    """
    Find the best move in the current position.

    The search runs on a private copy of `board`; the caller's board is
    never touched. Legal moves are shuffled with `rng` before the root
    loop so that equally valued moves vary from game to game, and the
    first candidate reaching the best value wins ties.

    Args:
        board: Current chess position
        depth: Plies to search from the root position (>= 1)
        evaluator: Position evaluation function
        rng: Random generator for the root shuffle (None = no shuffle)
        should_stop: Optional cancellation check

    Returns:
        SearchResult. `move` is None when the position has no legal moves
        or the search was cancelled.

    Raises:
        ValueError: If depth < 1
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    search_board = board.copy()
    legal_moves = list(search_board.legal_moves)
    if not legal_moves:
        return SearchResult(move=None, score=0, nodes=0, depth=depth)

    if rng is not None:
        legal_moves = [legal_moves[i] for i in rng.permutation(len(legal_moves))]

    maximizing = search_board.turn == chess.WHITE

    best_move = None
    best_score = -SEARCH_BOUND if maximizing else SEARCH_BOUND
    nodes = [0]

    try:
        for move in legal_moves:
            search_board.push(move)
            try:
                score = minimax(
                    search_board,
                    depth - 1,
                    -SEARCH_BOUND,
                    SEARCH_BOUND,
                    not maximizing,
                    evaluator,
                    nodes,
                    should_stop,
                )
            finally:
                search_board.pop()

            if best_move is None:
                best_score = score
                best_move = move
            elif maximizing and score > best_score:
                best_score = score
                best_move = move
            elif not maximizing and score < best_score:
                best_score = score
                best_move = move

    except SearchCancelled:
        logger.debug(f"Search cancelled after {nodes[0]} nodes")
        return SearchResult(move=None, score=0, nodes=nodes[0], depth=depth, cancelled=True)

    logger.debug(
        f"Search complete: depth={depth}, best_move={best_move.uci()}, "
        f"score={best_score}, nodes={nodes[0]}"
    )
    return SearchResult(move=best_move, score=best_score, nodes=nodes[0], depth=depth)
