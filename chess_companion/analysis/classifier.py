"""
Move quality classification.

A played move is labelled by how much it changed the static evaluation
from the mover's point of view:

    delta = sign(mover) * (evaluate(after) - evaluate(before))

with sign(white) = +1 and sign(black) = -1. Thresholds are checked in a
fixed order so boundary values land in exactly one bucket.
"""

from enum import Enum
from typing import Optional, Union

import chess

from chess_companion.evaluation.base import Evaluator
from chess_companion.evaluation.classical import ClassicalEvaluator

BoardLike = Union[chess.Board, str]

BLUNDER_THRESHOLD = -300
MISTAKE_THRESHOLD = -100
INACCURACY_THRESHOLD = -50
BRILLIANT_THRESHOLD = 200

_DEFAULT_EVALUATOR = ClassicalEvaluator()


class QualityLabel(Enum):
    BLUNDER = "blunder"
    MISTAKE = "mistake"
    INACCURACY = "inaccuracy"
    BRILLIANT = "brilliant"
    BEST = "best"


def _as_board(position: BoardLike) -> chess.Board:
    if isinstance(position, chess.Board):
        return position
    return chess.Board(position)


def evaluation_delta(
    before: BoardLike,
    after: BoardLike,
    mover_color: chess.Color,
    evaluator: Optional[Evaluator] = None,
) -> int:
    """Change in evaluation caused by a move, from the mover's perspective."""
    evaluator = evaluator or _DEFAULT_EVALUATOR
    sign = 1 if mover_color == chess.WHITE else -1
    return sign * (evaluator.evaluate(_as_board(after)) - evaluator.evaluate(_as_board(before)))


def classify_delta(delta: int) -> QualityLabel:
    if delta < BLUNDER_THRESHOLD:
        return QualityLabel.BLUNDER
    if delta < MISTAKE_THRESHOLD:
        return QualityLabel.MISTAKE
    if delta < INACCURACY_THRESHOLD:
        return QualityLabel.INACCURACY
    if delta > BRILLIANT_THRESHOLD:
        return QualityLabel.BRILLIANT
    return QualityLabel.BEST


def classify(
    before: BoardLike,
    after: BoardLike,
    mover_color: chess.Color,
    evaluator: Optional[Evaluator] = None,
) -> QualityLabel:
    """
    Label a single played move.

    Args:
        before: Position (Board or FEN) before the move
        after: Position (Board or FEN) after the move
        mover_color: Color of the side that made the move
        evaluator: Static evaluator (default: ClassicalEvaluator)

    Returns:
        QualityLabel for the move
    """
    return classify_delta(evaluation_delta(before, after, mover_color, evaluator))
