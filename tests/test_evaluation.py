"""
Unit Tests for Evaluation Module

Tests for position evaluation functions, focusing on:
    - Starting position balance
    - Material counting accuracy
    - Piece-square table orientation for both colors
    - Symmetry (mirrored position = negated evaluation)
    - Purity (no mutation of the board)
"""

import chess
import pytest

from chess_companion.evaluation import ClassicalEvaluator, Evaluator, PIECE_VALUES
from chess_companion.evaluation.classical import KNIGHT_TABLE, PAWN_TABLE


class TestClassicalEvaluator:
    """Tests for ClassicalEvaluator."""

    @pytest.fixture
    def evaluator(self):
        """Create a ClassicalEvaluator instance."""
        return ClassicalEvaluator()

    def test_is_evaluator(self, evaluator):
        assert isinstance(evaluator, Evaluator)

    def test_starting_position_is_exactly_zero(self, evaluator):
        """Starting position is perfectly balanced."""
        assert evaluator.evaluate(chess.Board()) == 0

    def test_returns_int(self, evaluator):
        board = chess.Board()
        board.push_san("e4")

        assert isinstance(evaluator.evaluate(board), int)

    def test_e4_favors_white(self, evaluator):
        """
        1. e4 moves the e-pawn from a -20 square to a +20 square.
        """
        board = chess.Board()
        board.push_san("e4")

        assert evaluator.evaluate(board) == 40

    def test_material_advantage(self, evaluator):
        """White missing the h1 rook: Black ahead by about a rook."""
        board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBN1 w Qkq - 0 1")

        score = evaluator.evaluate(board)

        assert score == -PIECE_VALUES[chess.ROOK]

    def test_black_piece_uses_mirrored_table(self, evaluator):
        """A black knight on f6 scores like a white knight on f3."""
        white = chess.Board("4k3/8/8/8/8/5N2/8/4K3 w - - 0 1")
        black = chess.Board("4k3/8/5n2/8/8/8/8/4K3 w - - 0 1")

        assert evaluator.evaluate(white) == -evaluator.evaluate(black)
        assert evaluator.piece_score(chess.Piece(chess.KNIGHT, chess.WHITE), chess.F3) == (
            PIECE_VALUES[chess.KNIGHT] + KNIGHT_TABLE[5, 5]
        )

    def test_advanced_pawn_bonus(self, evaluator):
        """Pawn on the 7th rank gets the +50 bonus for either color."""
        white = evaluator.piece_score(chess.Piece(chess.PAWN, chess.WHITE), chess.E7)
        black = evaluator.piece_score(chess.Piece(chess.PAWN, chess.BLACK), chess.E2)

        assert white == black == PIECE_VALUES[chess.PAWN] + PAWN_TABLE[1, 4]

    def test_symmetry(self, evaluator):
        """Mirroring the board and swapping colors negates the evaluation."""
        board = chess.Board(
            "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"
        )

        assert evaluator.evaluate(board.mirror()) == -evaluator.evaluate(board)

    def test_missing_king_sentinel(self, evaluator):
        """A board with no black king is off by the king sentinel value."""
        board = chess.Board("8/8/8/8/8/8/8/4K3 w - - 0 1")

        assert evaluator.evaluate(board) >= PIECE_VALUES[chess.KING] - 100

    def test_evaluation_does_not_mutate(self, evaluator):
        board = chess.Board()
        board.push_san("d4")
        fen = board.fen()

        evaluator.evaluate(board)

        assert board.fen() == fen
        assert len(board.move_stack) == 1

    def test_checkmate_not_special_cased(self, evaluator):
        """Static evaluation scores the material, not the mate."""
        board = chess.Board()
        for san in ["f3", "e5", "g4", "Qh4#"]:
            board.push_san(san)

        assert abs(evaluator.evaluate(board)) < 1000

    def test_callable(self, evaluator):
        assert evaluator(chess.Board()) == 0
