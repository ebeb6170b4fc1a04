"""
Unit Tests for Move Classification and Match Review
"""

import chess
import pytest

from chess_companion.analysis import (
    QualityLabel,
    classify,
    classify_delta,
    evaluation_delta,
    review_library,
    review_match,
)
from chess_companion.exceptions import CorruptedRecord
from chess_companion.storage import MatchRecord
from chess_companion.board import MatchResult

NO_WHITE_QUEEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1"


class TestClassifyDelta:
    @pytest.mark.parametrize("delta,expected", [
        (-350, QualityLabel.BLUNDER),
        (-150, QualityLabel.MISTAKE),
        (-60, QualityLabel.INACCURACY),
        (250, QualityLabel.BRILLIANT),
        (0, QualityLabel.BEST),
        (40, QualityLabel.BEST),
    ])
    def test_buckets(self, delta, expected):
        assert classify_delta(delta) == expected

    @pytest.mark.parametrize("delta,expected", [
        (-301, QualityLabel.BLUNDER),
        (-300, QualityLabel.MISTAKE),
        (-101, QualityLabel.MISTAKE),
        (-100, QualityLabel.INACCURACY),
        (-51, QualityLabel.INACCURACY),
        (-50, QualityLabel.BEST),
        (200, QualityLabel.BEST),
        (201, QualityLabel.BRILLIANT),
    ])
    def test_thresholds_are_strict(self, delta, expected):
        assert classify_delta(delta) == expected


class TestClassify:
    def test_quiet_opening_move_is_best(self):
        board = chess.Board()
        before = board.fen()
        board.push_san("e4")

        assert evaluation_delta(before, board.fen(), chess.WHITE) == 40
        assert classify(before, board, chess.WHITE) == QualityLabel.BEST

    def test_losing_the_queen_is_a_blunder(self):
        assert classify(chess.STARTING_FEN, NO_WHITE_QUEEN, chess.WHITE) == QualityLabel.BLUNDER

    def test_sign_flips_for_black(self):
        """The same material swing is good news for the other side."""
        assert classify(chess.STARTING_FEN, NO_WHITE_QUEEN, chess.BLACK) == QualityLabel.BRILLIANT

    def test_white_wins_queen(self):
        before = "4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1"
        after = "4k3/8/8/3R4/8/8/8/4K3 b - - 0 1"

        assert classify(before, after, chess.WHITE) == QualityLabel.BRILLIANT

    def test_black_wins_rook(self):
        before = "4k3/8/8/3q4/8/8/3R4/4K3 b - - 0 1"
        after = "4k3/8/8/8/8/8/3q4/4K3 w - - 0 2"

        assert evaluation_delta(before, after, chess.BLACK) > 200
        assert classify(before, after, chess.BLACK) == QualityLabel.BRILLIANT


class TestReviewMatch:
    @pytest.fixture
    def fools_mate(self):
        return MatchRecord.create(
            ["f3", "e5", "g4", "Qh4#"], MatchResult.BLACK_WINS, "Player 2", record_id="fm"
        )

    def test_replays_every_ply(self, fools_mate):
        review = review_match(fools_mate)

        assert len(review) == 4
        assert len(review.fens) == 5
        assert len(review.evaluations) == 4
        assert review.position_at(-1) == chess.STARTING_FEN
        assert chess.Board(review.position_at(3)).is_checkmate()

    def test_first_moves_labelled(self, fools_mate):
        review = review_match(fools_mate)

        assert all(isinstance(label, QualityLabel) for label in review.labels)
        assert review.labels[1] == QualityLabel.BEST

    def test_position_out_of_range(self, fools_mate):
        review = review_match(fools_mate)

        with pytest.raises(IndexError):
            review.position_at(4)
        with pytest.raises(IndexError):
            review.position_at(-2)

    def test_corrupted_record(self):
        record = MatchRecord.create(["e4", "e4"], MatchResult.UNTERMINATED, "Player 2", record_id="bad")

        with pytest.raises(CorruptedRecord) as exc_info:
            review_match(record)

        assert exc_info.value.record_id == "bad"
        assert exc_info.value.ply == 1
        assert exc_info.value.san == "e4"

    def test_library_isolates_corrupted_records(self, fools_mate):
        bad = MatchRecord.create(["e4", "Ke3"], MatchResult.UNTERMINATED, "Player 2", record_id="bad")

        library = review_library([fools_mate, bad])

        assert [r.record.id for r in library.reviews] == ["fm"]
        assert [f.record_id for f in library.failures] == ["bad"]
