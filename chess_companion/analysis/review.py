"""
Match review.

Replays an archived match from the standard starting position and builds
what a review screen shows: the position after every ply, the evaluation
curve, and a quality label for each move.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import chess

from chess_companion.analysis.classifier import QualityLabel, classify
from chess_companion.board.rules import RulesEngine
from chess_companion.evaluation.base import Evaluator
from chess_companion.evaluation.classical import ClassicalEvaluator
from chess_companion.exceptions import CorruptedRecord
from chess_companion.storage.records import MatchRecord

logger = logging.getLogger(__name__)


@dataclass
class MatchReview:
    """
    Move-by-move replay of one archived match.

    Attributes:
        record: The archived match
        fens: Starting position followed by the position after each ply
        evaluations: Centipawn evaluation after each ply
        labels: Quality label of each ply's move
    """

    record: MatchRecord
    fens: List[str]
    evaluations: List[int]
    labels: List[QualityLabel]

    def __len__(self) -> int:
        return len(self.labels)

    def position_at(self, index: int) -> str:
        """FEN after move `index` (0-based); -1 is the starting position."""
        if index < -1 or index >= len(self.labels):
            raise IndexError(f"Move index {index} out of range for {len(self.labels)} moves")
        return self.fens[index + 1]


@dataclass
class LibraryReview:
    """Reviews of a whole match library, with corrupted records set aside."""

    reviews: List[MatchReview] = field(default_factory=list)
    failures: List[CorruptedRecord] = field(default_factory=list)


def review_match(
    record: MatchRecord,
    rules: Optional[RulesEngine] = None,
    evaluator: Optional[Evaluator] = None,
) -> MatchReview:
    """
    Replay an archived match and score every move.

    Raises:
        CorruptedRecord: If a stored move does not replay from the position
            reached so far
    """
    rules = rules or RulesEngine()
    evaluator = evaluator or ClassicalEvaluator()

    board = chess.Board()
    fens = [board.fen()]
    evaluations = []
    labels = []

    for ply, san in enumerate(record.moves):
        try:
            move = board.parse_san(san)
        except ValueError as e:
            raise CorruptedRecord(record.id, ply, san, str(e)) from e

        applied = rules.apply(board, move)
        fens.append(applied.fen_after)
        evaluations.append(evaluator.evaluate(board))
        labels.append(classify(applied.fen_before, applied.fen_after, applied.color, evaluator))

    return MatchReview(record=record, fens=fens, evaluations=evaluations, labels=labels)


def review_library(
    records: Iterable[MatchRecord],
    rules: Optional[RulesEngine] = None,
    evaluator: Optional[Evaluator] = None,
) -> LibraryReview:
    """Review every record; a corrupted one is reported and skipped."""
    rules = rules or RulesEngine()
    evaluator = evaluator or ClassicalEvaluator()

    library = LibraryReview()
    for record in records:
        try:
            library.reviews.append(review_match(record, rules, evaluator))
        except CorruptedRecord as e:
            logger.warning(str(e))
            library.failures.append(e)

    return library
