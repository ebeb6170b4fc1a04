"""
Engine Tactics Suite

Small set of positions with a known best move, used to check that each
difficulty level still sees what it should and to time the search.

Test Positions:
    - MATE.*: Mate in one. Needs at least two plies (MEDIUM) because the
      mate is only recognised when the mated side has no reply.
    - CAPTURE.*: A loose piece to take. One ply (EASY) is enough.

Evaluation Metrics:
    - Correct Moves: Number of positions where the engine found a best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total nodes visited
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import chess

from chess_companion.search.engine import Difficulty, SearchEngine

logger = logging.getLogger(__name__)


@dataclass
class TacticalPosition:
    """
    A position with expected best move(s).

    Attributes:
        id: Position identifier (e.g., "MATE.01")
        fen: Board position in FEN notation
        best_moves: List of acceptable best moves (UCI format)
        description: Human-readable description of the position
        min_difficulty: Weakest level expected to solve it
    """
    id: str
    fen: str
    best_moves: List[str]
    description: str = ""
    min_difficulty: Difficulty = Difficulty.EASY


@dataclass
class TacticalResult:
    """Result of searching one position."""
    position: TacticalPosition
    found_move: str
    score: int
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    difficulty: Difficulty = Difficulty.EASY


TACTICAL_POSITIONS = [
    TacticalPosition(
        id="MATE.01",
        fen="6k1/5ppp/8/8/8/8/8/R6K w - - 0 1",
        best_moves=["a1a8"],
        description="Back-rank mate with Ra8#",
        min_difficulty=Difficulty.MEDIUM,
    ),
    TacticalPosition(
        id="MATE.02",
        fen="r6k/8/8/8/8/8/5PPP/6K1 b - - 0 1",
        best_moves=["a8a1"],
        description="Black back-rank mate with Ra1#",
        min_difficulty=Difficulty.MEDIUM,
    ),
    TacticalPosition(
        id="MATE.03",
        fen="rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2",
        best_moves=["d8h4"],
        description="Fool's mate with Qh4#",
        min_difficulty=Difficulty.MEDIUM,
    ),
    TacticalPosition(
        id="CAPTURE.01",
        fen="4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1",
        best_moves=["d2d5"],
        description="White rook takes the loose queen",
        min_difficulty=Difficulty.EASY,
    ),
]


def evaluate_position(
    position: TacticalPosition,
    engine: SearchEngine,
    difficulty: Difficulty,
    verbose: bool = False,
) -> TacticalResult:
    """
    Search a single test position.

    Args:
        position: Test position to search
        engine: Search engine to use
        difficulty: Difficulty level (sets the depth)
        verbose: If True, print detailed output

    Returns:
        TacticalResult with the engine's move and whether it was correct
    """
    board = chess.Board(position.fen)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"FEN: {position.fen}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    result = engine.analyse(board, difficulty)
    time_taken = time.time() - start_time

    found_move_uci = result.move.uci() if result.move else ""
    correct = found_move_uci in position.best_moves

    if verbose:
        print(f"Engine found: {found_move_uci} (score: {result.score})")
        print(f"Nodes searched: {result.nodes:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'CORRECT' if correct else 'WRONG'}")

    return TacticalResult(
        position=position,
        found_move=found_move_uci,
        score=result.score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=result.nodes,
        difficulty=difficulty,
    )


def run_tactics(
    engine: SearchEngine,
    difficulty: Difficulty,
    positions: Optional[List[TacticalPosition]] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the tactics suite at one difficulty.

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TacticalResult objects
            - avg_time: Average time per position
            - total_time: Total search time
    """
    positions = TACTICAL_POSITIONS if positions is None else positions

    if verbose:
        print("=" * 70)
        print(f"TACTICS SUITE - {difficulty.value.upper()}")
        print("=" * 70)

    results = [evaluate_position(p, engine, difficulty, verbose=verbose) for p in positions]

    correct_count = sum(1 for r in results if r.correct)
    total_time = sum(r.time_taken for r in results)
    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    logger.info(f"Tactics at {difficulty.value}: {correct_count}/{len(positions)} in {total_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }
