"""
Rules Engine Adapter

Thin wrapper over python-chess that gives the game core everything it
needs from chess rules without knowing the library's details:

    - Legal move listing (optionally from a single origin square)
    - Move lookup from (from, to) squares with a promotion default
    - Applying a move and describing it (SAN, capture, FENs)
    - Undo of the most recent move
    - Check / checkmate / draw detection and the game result
    - FEN and PGN encode/decode

Positions are plain chess.Board objects. The adapter never keeps a board
of its own, so one instance can be shared by any number of sessions and
search threads.

Reference:
    python-chess: https://python-chess.readthedocs.io/
"""

import io
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

import chess
import chess.pgn

SquareLike = Union[int, str]

PROMOTION_PIECES = (chess.QUEEN, chess.ROOK, chess.BISHOP, chess.KNIGHT)


class MatchResult(Enum):
    """Outcome of a match, stored as the PGN result token."""

    WHITE_WINS = "1-0"
    BLACK_WINS = "0-1"
    DRAW = "1/2-1/2"
    UNTERMINATED = "*"

    @property
    def is_decisive(self) -> bool:
        return self in (MatchResult.WHITE_WINS, MatchResult.BLACK_WINS)


@dataclass(frozen=True)
class AppliedMove:
    """
    Description of a move that was played.

    Attributes:
        from_square: Origin square
        to_square: Destination square
        color: Color of the side that moved
        san: Standard Algebraic Notation, computed before the move
        fen_before: Position before the move
        fen_after: Position after the move
        promoted_to: Piece type the pawn promoted to, if any
        captured_type: Type of the piece removed from the board, if any
    """

    from_square: chess.Square
    to_square: chess.Square
    color: chess.Color
    san: str
    fen_before: str
    fen_after: str
    promoted_to: Optional[chess.PieceType] = None
    captured_type: Optional[chess.PieceType] = None

    @property
    def move(self) -> chess.Move:
        return chess.Move(self.from_square, self.to_square, promotion=self.promoted_to)

    @property
    def uci(self) -> str:
        return self.move.uci()

    @property
    def is_capture(self) -> bool:
        return self.captured_type is not None

    @property
    def captured_color(self) -> Optional[chess.Color]:
        """Color of the captured piece (always the opponent of the mover)."""
        if self.captured_type is None:
            return None
        return not self.color


@dataclass(frozen=True)
class InvalidMove:
    """Result returned instead of an AppliedMove when a move is rejected."""

    from_square: SquareLike
    to_square: SquareLike
    reason: str = "illegal move"

    def __bool__(self) -> bool:
        return False


def parse_square(square: SquareLike) -> Optional[chess.Square]:
    """
    Convert a square name ("e2") or index (12) to a chess.Square.

    Returns:
        The square index, or None if the input is not a square
    """
    if isinstance(square, bool):
        return None
    if isinstance(square, int):
        return square if 0 <= square < 64 else None
    if isinstance(square, str):
        try:
            return chess.parse_square(square.strip().lower())
        except ValueError:
            return None
    return None


class RulesEngine:
    """
    Stateless chess rules service.

    Every method takes the board it works on, so the caller decides which
    position is authoritative and which ones are scratch copies.
    """

    def __init__(self, default_promotion: chess.PieceType = chess.QUEEN):
        if default_promotion not in PROMOTION_PIECES:
            raise ValueError(f"Cannot promote to {chess.piece_name(default_promotion)}")
        self.default_promotion = default_promotion

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------

    def legal_moves(
        self, board: chess.Board, from_square: Optional[SquareLike] = None
    ) -> List[chess.Move]:
        """List legal moves, optionally only those leaving from_square."""
        if from_square is None:
            return list(board.legal_moves)

        origin = parse_square(from_square)
        if origin is None:
            return []
        return [move for move in board.legal_moves if move.from_square == origin]

    def find_move(
        self,
        board: chess.Board,
        from_square: SquareLike,
        to_square: SquareLike,
        promotion: Optional[chess.PieceType] = None,
    ) -> Optional[chess.Move]:
        """
        Find the legal move going from from_square to to_square.

        A pawn reaching the last rank promotes to `promotion`, or to the
        engine's default promotion piece (queen) when none is given. The
        promotion argument is ignored for non-promoting moves.

        Returns:
            The matching legal move, or None if there is none
        """
        origin = parse_square(from_square)
        target = parse_square(to_square)
        if origin is None or target is None:
            return None

        candidates = [
            move
            for move in board.legal_moves
            if move.from_square == origin and move.to_square == target
        ]
        if not candidates:
            return None

        wanted = promotion or self.default_promotion
        for move in candidates:
            if move.promotion is None or move.promotion == wanted:
                return move
        return None

    # ------------------------------------------------------------------
    # Apply / undo
    # ------------------------------------------------------------------

    def apply(self, board: chess.Board, move: chess.Move) -> AppliedMove:
        """
        Push a legal move onto the board and describe it.

        Raises:
            ValueError: If the move is not legal in this position
        """
        if not board.is_legal(move):
            raise ValueError(f"Illegal move {move.uci()} in {board.fen()}")

        fen_before = board.fen()
        san = board.san(move)
        color = board.turn

        captured_type = None
        if board.is_en_passant(move):
            captured_type = chess.PAWN
        elif board.is_capture(move):
            captured = board.piece_at(move.to_square)
            captured_type = captured.piece_type if captured else None

        board.push(move)

        return AppliedMove(
            from_square=move.from_square,
            to_square=move.to_square,
            color=color,
            san=san,
            fen_before=fen_before,
            fen_after=board.fen(),
            promoted_to=move.promotion,
            captured_type=captured_type,
        )

    def undo(self, board: chess.Board) -> Optional[chess.Move]:
        """Take back the most recent move. Returns None if there is none."""
        if not board.move_stack:
            return None
        return board.pop()

    # ------------------------------------------------------------------
    # Game state
    # ------------------------------------------------------------------

    def is_check(self, board: chess.Board) -> bool:
        return board.is_check()

    def is_checkmate(self, board: chess.Board) -> bool:
        return board.is_checkmate()

    def is_draw(self, board: chess.Board) -> bool:
        """
        Check if position is a draw by rule.

            - Stalemate
            - Insufficient material
            - Fifty-move rule
            - Threefold repetition
        """
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.is_repetition(3)
        )

    def is_game_over(self, board: chess.Board) -> bool:
        return self.is_checkmate(board) or self.is_draw(board)

    def result(self, board: chess.Board) -> MatchResult:
        """Result of the game as it stands on this board."""
        if board.is_checkmate():
            # Side to move is mated
            return MatchResult.BLACK_WINS if board.turn == chess.WHITE else MatchResult.WHITE_WINS
        if self.is_draw(board):
            return MatchResult.DRAW
        return MatchResult.UNTERMINATED

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_fen(self, board: chess.Board) -> str:
        return board.fen()

    def from_fen(self, fen: str) -> chess.Board:
        """
        Raises:
            ValueError: If the FEN is malformed
        """
        return chess.Board(fen)

    def to_pgn(self, board: chess.Board) -> str:
        """Encode the board's full move sequence as a PGN game record."""
        game = chess.pgn.Game.from_board(board)
        game.headers["Result"] = self.result(board).value
        exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=False)
        return game.accept(exporter)

    def from_pgn(self, pgn: str) -> chess.Board:
        """
        Decode a PGN game record into a board with its move stack.

        Raises:
            ValueError: If the PGN is empty or contains illegal moves
        """
        game = chess.pgn.read_game(io.StringIO(pgn))
        if game is None:
            raise ValueError("Empty PGN")
        if game.errors:
            raise ValueError(f"Invalid PGN: {game.errors[0]}")

        board = game.board()
        for move in game.mainline_moves():
            board.push(move)
        return board

    def replay_san(self, moves: Iterable[str], board: Optional[chess.Board] = None) -> chess.Board:
        """
        Play a sequence of SAN moves from the standard start (or `board`).

        Raises:
            ValueError: On the first move that does not parse or is illegal
        """
        board = board.copy() if board is not None else chess.Board()
        for san in moves:
            board.push_san(san)
        return board

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(default_promotion={chess.piece_name(self.default_promotion)})"
