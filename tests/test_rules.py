"""
Unit Tests for the Rules Engine Adapter

Tests for move lookup, application, undo, terminal detection and
FEN/PGN serialization.
"""

import chess
import pytest

from chess_companion.board import AppliedMove, InvalidMove, MatchResult, RulesEngine, parse_square


@pytest.fixture
def rules():
    return RulesEngine()


class TestParseSquare:
    def test_names_and_indices(self):
        assert parse_square("e2") == chess.E2
        assert parse_square("E4") == chess.E4
        assert parse_square(chess.H8) == chess.H8

    def test_rejects_garbage(self):
        assert parse_square("z9") is None
        assert parse_square(64) is None
        assert parse_square(None) is None
        assert parse_square(True) is None


class TestMoveLookup:
    def test_find_legal_move(self, rules):
        board = chess.Board()
        move = rules.find_move(board, "e2", "e4")

        assert move == chess.Move.from_uci("e2e4")

    def test_illegal_move_not_found(self, rules):
        board = chess.Board()

        assert rules.find_move(board, "e2", "e5") is None
        assert rules.find_move(board, "e7", "e5") is None, "Not black's turn"

    def test_promotion_defaults_to_queen(self, rules):
        board = chess.Board("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = rules.find_move(board, "e7", "e8")

        assert move.promotion == chess.QUEEN

    def test_underpromotion(self, rules):
        board = chess.Board("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = rules.find_move(board, "e7", "e8", promotion=chess.KNIGHT)

        assert move.promotion == chess.KNIGHT

    def test_legal_moves_from_square(self, rules):
        board = chess.Board()
        moves = rules.legal_moves(board, "g1")

        assert {m.uci() for m in moves} == {"g1f3", "g1h3"}
        assert len(rules.legal_moves(board)) == 20


class TestApplyUndo:
    def test_apply_describes_move(self, rules):
        board = chess.Board()
        applied = rules.apply(board, chess.Move.from_uci("e2e4"))

        assert isinstance(applied, AppliedMove)
        assert applied.san == "e4"
        assert applied.color == chess.WHITE
        assert applied.fen_before == chess.STARTING_FEN
        assert applied.fen_after == board.fen()
        assert not applied.is_capture

    def test_capture_recorded(self, rules):
        board = chess.Board()
        for san in ["e4", "d5"]:
            board.push_san(san)

        applied = rules.apply(board, chess.Move.from_uci("e4d5"))

        assert applied.captured_type == chess.PAWN
        assert applied.captured_color == chess.BLACK
        assert applied.san == "exd5"

    def test_en_passant_capture(self, rules):
        board = chess.Board()
        for san in ["e4", "a6", "e5", "d5"]:
            board.push_san(san)

        applied = rules.apply(board, chess.Move.from_uci("e5d6"))

        assert applied.captured_type == chess.PAWN

    def test_castling_is_not_capture(self, rules):
        board = chess.Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        applied = rules.apply(board, chess.Move.from_uci("e1g1"))

        assert applied.san == "O-O"
        assert applied.captured_type is None

    def test_apply_rejects_illegal(self, rules):
        board = chess.Board()

        with pytest.raises(ValueError):
            rules.apply(board, chess.Move.from_uci("e2e5"))

    def test_undo_round_trip(self, rules):
        """Every legal move undoes back to the exact same position."""
        board = chess.Board(
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"
        )
        fen = board.fen()

        for move in rules.legal_moves(board):
            rules.apply(board, move)
            rules.undo(board)
            assert board.fen() == fen, f"Undo of {move.uci()} changed the position"

    def test_undo_empty_board(self, rules):
        assert rules.undo(chess.Board()) is None

    def test_invalid_move_is_falsy(self):
        assert not InvalidMove("e2", "e5")


class TestGameState:
    def test_fools_mate_result(self, rules):
        board = rules.replay_san(["f3", "e5", "g4", "Qh4#"])

        assert rules.is_checkmate(board)
        assert rules.is_game_over(board)
        assert rules.result(board) == MatchResult.BLACK_WINS

    def test_stalemate_is_draw(self, rules):
        board = chess.Board("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")

        assert rules.is_draw(board)
        assert rules.result(board) == MatchResult.DRAW

    def test_insufficient_material_is_draw(self, rules):
        board = chess.Board("8/8/8/4k3/8/8/8/4K3 w - - 0 1")

        assert rules.is_draw(board)

    def test_start_position_unterminated(self, rules):
        board = chess.Board()

        assert not rules.is_game_over(board)
        assert rules.result(board) == MatchResult.UNTERMINATED


class TestSerialization:
    def test_fen_round_trip(self, rules):
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"

        assert rules.to_fen(rules.from_fen(fen)) == fen

    def test_invalid_fen(self, rules):
        with pytest.raises(ValueError):
            rules.from_fen("not a fen")

    def test_pgn_round_trip(self, rules):
        board = rules.replay_san(["e4", "e5", "Nf3", "Nc6", "Bb5"])
        restored = rules.from_pgn(rules.to_pgn(board))

        assert restored.fen() == board.fen()
        assert restored.move_stack == board.move_stack

    def test_pgn_records_result(self, rules):
        board = rules.replay_san(["f3", "e5", "g4", "Qh4#"])

        assert '[Result "0-1"]' in rules.to_pgn(board)

    def test_pgn_with_illegal_move(self, rules):
        with pytest.raises(ValueError):
            rules.from_pgn("1. e4 e5 2. Ke3 *")

    def test_empty_pgn(self, rules):
        with pytest.raises(ValueError):
            rules.from_pgn("")

    def test_replay_san_rejects_illegal(self, rules):
        with pytest.raises(ValueError):
            rules.replay_san(["e4", "e4"])
