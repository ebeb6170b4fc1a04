"""
Game Session

The orchestration layer. A GameSession owns the one authoritative board
of a match and is the only thing that writes to it. It:

    - applies human moves through the rules engine
    - keeps the SAN history and the capture ledgers
    - detects checkmate / draw and archives the match exactly once
    - schedules the built-in opponent's turn on a background thread,
      against a private copy of the board
    - saves a snapshot of the game after each move and each mode or
      difficulty change

Threading:
    - Caller thread: human moves, new games, mode changes
    - Engine thread: one EngineTask at a time, searching a board copy
    - Every state change goes through one re-entrant lock, so moves from
      the human and from the engine are applied one at a time

A completed engine search is applied only if the task is still the
session's current task and the generation has not moved on (reset, mode
change, close). Otherwise the move is dropped.
"""

import logging
import threading
from typing import Dict, List, Optional, Union

import chess

from chess_companion.analysis.classifier import BoardLike, QualityLabel, classify
from chess_companion.board.rules import (
    AppliedMove,
    InvalidMove,
    MatchResult,
    RulesEngine,
    SquareLike,
)
from chess_companion.evaluation.base import Evaluator
from chess_companion.evaluation.classical import ClassicalEvaluator
from chess_companion.exceptions import PersistenceFailure
from chess_companion.feedback import FeedbackSink, NullFeedback
from chess_companion.search.engine import Difficulty, SearchEngine
from chess_companion.session.config import SessionConfig
from chess_companion.session.states import GameMode, SessionState
from chess_companion.session.task import EngineTask
from chess_companion.storage.base import MatchStore
from chess_companion.storage.memory import MemoryStore
from chess_companion.storage.records import MatchRecord, SessionSnapshot

logger = logging.getLogger(__name__)

MoveOutcome = Union[AppliedMove, InvalidMove]


class GameSession:
    """
    One chess match at a time, against the engine or a second player.

    Attributes:
        config: Session configuration
        rules: Rules engine collaborator
        search_engine: Built-in opponent
        evaluator: Evaluator used for the running evaluation
        store: Persistence boundary
        feedback: Notification sink
        board: The authoritative position (do not mutate from outside)
        state: Lifecycle state
        mode: Current game mode
        difficulty: Current engine difficulty
        result: Result once the game is terminal, else UNTERMINATED
        last_persistence_error: Most recent storage failure, if any
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        rules: Optional[RulesEngine] = None,
        search_engine: Optional[SearchEngine] = None,
        evaluator: Optional[Evaluator] = None,
        store: Optional[MatchStore] = None,
        feedback: Optional[FeedbackSink] = None,
    ):
        self.config = config or SessionConfig()
        self.rules = rules or RulesEngine(default_promotion=self.config.default_promotion)
        self.evaluator = evaluator or ClassicalEvaluator()
        self.search_engine = search_engine or SearchEngine(self.evaluator, seed=self.config.seed)
        self.store = store if store is not None else MemoryStore()
        self.feedback = feedback or NullFeedback()

        self._gate = threading.RLock()
        self._generation = 0
        self._engine_task: Optional[EngineTask] = None
        self._closed = False
        self._last_snapshot: Optional[SessionSnapshot] = None
        self._archived_record: Optional[MatchRecord] = None
        self._terminal_archived = False

        self.board = chess.Board()
        self.state = SessionState.IDLE
        self.mode = self.config.default_mode
        self.difficulty = self.config.default_difficulty
        self.result = MatchResult.UNTERMINATED
        self.last_persistence_error: Optional[PersistenceFailure] = None

        self._applied: List[AppliedMove] = []
        self._history: List[str] = []
        self._captured: Dict[chess.Color, List[chess.PieceType]] = {
            chess.WHITE: [],
            chess.BLACK: [],
        }

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def side_to_move(self) -> chess.Color:
        return self.board.turn

    @property
    def fen(self) -> str:
        with self._gate:
            return self.rules.to_fen(self.board)

    @property
    def applied_moves(self) -> List[AppliedMove]:
        with self._gate:
            return list(self._applied)

    @property
    def captured_white(self) -> List[chess.PieceType]:
        """White pieces removed from the board, in capture order."""
        with self._gate:
            return list(self._captured[chess.WHITE])

    @property
    def captured_black(self) -> List[chess.PieceType]:
        """Black pieces removed from the board, in capture order."""
        with self._gate:
            return list(self._captured[chess.BLACK])

    def captured(self, color: chess.Color) -> List[chess.PieceType]:
        with self._gate:
            return list(self._captured[color])

    @property
    def is_check(self) -> bool:
        with self._gate:
            return self.rules.is_check(self.board)

    @property
    def is_checkmate(self) -> bool:
        with self._gate:
            return self.rules.is_checkmate(self.board)

    @property
    def is_draw(self) -> bool:
        with self._gate:
            return self.rules.is_draw(self.board)

    @property
    def engine_task(self) -> Optional[EngineTask]:
        return self._engine_task

    @property
    def engine_thinking(self) -> bool:
        task = self._engine_task
        return task is not None and not task.done

    def get_history(self) -> List[str]:
        """SAN moves played so far."""
        with self._gate:
            return list(self._history)

    def get_evaluation(self) -> int:
        """Static evaluation of the current position in centipawns."""
        with self._gate:
            return self.evaluator.evaluate(self.board)

    def pgn(self) -> str:
        with self._gate:
            return self.rules.to_pgn(self.board)

    def is_engine_turn(self) -> bool:
        return (
            not self._closed
            and self.mode == GameMode.VS_ENGINE
            and self.state == SessionState.IN_PROGRESS
            and self.board.turn == self.config.engine_color
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_new_game(
        self,
        mode: Optional[GameMode] = None,
        difficulty: Optional[Difficulty] = None,
    ):
        """Reset board, history, ledgers and state, and begin a new match."""
        with self._gate:
            mode = GameMode(mode) if mode is not None else self.mode
            difficulty = Difficulty(difficulty) if difficulty is not None else self.difficulty

            self._reset(mode, difficulty)
            self.state = SessionState.IN_PROGRESS
            logger.info(f"New game: mode={mode.value}, difficulty={difficulty.value}")

            self._save_snapshot()
            self._maybe_schedule_engine_turn()

    def set_mode(self, mode: GameMode):
        with self._gate:
            mode = GameMode(mode)
            if mode == self.mode:
                return
            self._cancel_engine_task()
            self._generation += 1
            self.mode = mode
            logger.info(f"Game mode changed to {mode.value}")

            self._save_snapshot()
            self._maybe_schedule_engine_turn()

    def set_difficulty(self, difficulty: Difficulty):
        with self._gate:
            difficulty = Difficulty(difficulty)
            if difficulty == self.difficulty:
                return
            self._cancel_engine_task()
            self.difficulty = difficulty
            logger.info(f"Difficulty changed to {difficulty.value}")

            self._save_snapshot()
            self._maybe_schedule_engine_turn()

    def close(self):
        """Tear the session down. Pending engine work is cancelled and dropped."""
        with self._gate:
            self._closed = True
            self._generation += 1
            self._cancel_engine_task()
            logger.debug("Session closed")

    def load_saved_game(self) -> bool:
        """
        Restore the game saved in the store.

        Returns:
            True if a snapshot was restored; False if there was none or it
            could not be read (the session is left as it was)
        """
        with self._gate:
            try:
                snapshot = self.store.load_session_snapshot()
            except PersistenceFailure as e:
                self._record_persistence_failure("load saved game", e)
                return False

            if snapshot is None:
                return False

            try:
                mode = GameMode(snapshot.mode)
                difficulty = Difficulty(snapshot.difficulty)
                saved_board = self.rules.from_pgn(snapshot.pgn)
            except ValueError as e:
                logger.warning(f"Saved game is corrupted, ignoring it: {e}")
                return False

            self._reset(mode, difficulty)
            replay = saved_board.root()
            for move in saved_board.move_stack:
                self._record(self.rules.apply(replay, move))
            self.board = replay
            self._last_snapshot = snapshot

            if self.rules.is_game_over(self.board):
                # Archived when it ended; do not archive again
                self._terminal_archived = True
                self.state = SessionState.TERMINAL
                self.result = self.rules.result(self.board)
            else:
                self.state = SessionState.IN_PROGRESS

            logger.info(f"Restored saved game: {len(self._history)} moves, mode={mode.value}")
            self._maybe_schedule_engine_turn()
            return True

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def apply_move(
        self,
        from_square: SquareLike,
        to_square: SquareLike,
        promotion: Optional[chess.PieceType] = None,
    ) -> MoveOutcome:
        """
        Play a move from one square to another.

        A promoting pawn becomes a queen unless `promotion` says otherwise.

        Returns:
            AppliedMove on success; InvalidMove (falsy) if the move was
            rejected, in which case nothing changed
        """
        with self._gate:
            if self._closed:
                return InvalidMove(from_square, to_square, "session is closed")
            if self.state == SessionState.IDLE:
                return InvalidMove(from_square, to_square, "no game in progress")
            if self.state == SessionState.TERMINAL:
                return InvalidMove(from_square, to_square, "game is over")

            move = self.rules.find_move(self.board, from_square, to_square, promotion)
            if move is None:
                logger.debug(f"Invalid move attempted: {from_square} -> {to_square}")
                return InvalidMove(from_square, to_square)

            applied = self.rules.apply(self.board, move)
            self._record(applied)
            logger.debug(f"Applied {applied.san} ({applied.uci})")

            self._notify("move_applied", applied.is_capture)
            self._save_snapshot()

            if not self.check_terminal():
                if self.rules.is_check(self.board):
                    self._notify("check")
                self._maybe_schedule_engine_turn()

            return applied

    def request_engine_turn(self) -> bool:
        """
        Ask the engine to move if it is its turn.

        Returns:
            True if an engine turn was scheduled; False (and nothing
            happens) if it is not the engine's turn
        """
        with self._gate:
            return self._maybe_schedule_engine_turn()

    def wait_for_engine(self, timeout: Optional[float] = None) -> bool:
        """Block until the pending engine turn (if any) has finished."""
        task = self._engine_task
        if task is not None and not task.wait(timeout):
            return False
        # The engine clears its task before applying its move under the gate
        with self._gate:
            return True

    # ------------------------------------------------------------------
    # Terminal state / archive
    # ------------------------------------------------------------------

    def check_terminal(self) -> bool:
        """
        Move to TERMINAL if the position is checkmate or a draw.

        Only the first detection has side effects (archive, game over
        notification); calling it again on a terminal session is a no-op.

        Returns:
            True if the session is terminal
        """
        with self._gate:
            if self.state == SessionState.TERMINAL:
                return True
            if self.state != SessionState.IN_PROGRESS:
                return False
            if not self.rules.is_game_over(self.board):
                return False

            self.state = SessionState.TERMINAL
            self.result = self.rules.result(self.board)
            self._cancel_engine_task()
            logger.info(f"Game over: {self.result.value} after {len(self._history)} moves")

            self.archive_current_match()
            self._notify("game_over", self.result)
            return True

    def archive_current_match(self) -> Optional[MatchRecord]:
        """
        Add the current match to the library.

        A position is archived at most once; calling again before another
        move is played returns the same record. A match archived while in
        progress is archived again (with its result) when it ends. Nothing
        is archived for a game with no moves, or for a restored game that
        was archived when it ended.

        Returns:
            The archived record, or None if nothing was archived
        """
        with self._gate:
            cached = self._archived_record
            if cached is not None and cached.move_count == len(self._history):
                return cached
            if self._terminal_archived:
                return cached
            if not self._history:
                return None

            record = MatchRecord.create(
                moves=self._history,
                result=self.rules.result(self.board),
                opponent=self.config.opponent_label(self.mode, self.difficulty),
            )
            try:
                self.store.append_match_record(record)
            except PersistenceFailure as e:
                self._record_persistence_failure("archive match", e)
                return None

            self._archived_record = record
            if self.state == SessionState.TERMINAL:
                self._terminal_archived = True
            logger.info(f"Match archived: {record.id} ({record.result.value})")
            return record

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def classify_move(
        self, before: BoardLike, after: BoardLike, color: chess.Color
    ) -> QualityLabel:
        return classify(before, after, color, self.evaluator)

    def classify_applied_move(self, applied: AppliedMove) -> QualityLabel:
        return classify(applied.fen_before, applied.fen_after, applied.color, self.evaluator)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset(self, mode: GameMode, difficulty: Difficulty):
        self._cancel_engine_task()
        self._generation += 1
        self._closed = False

        self.board = chess.Board()
        self.mode = mode
        self.difficulty = difficulty
        self.state = SessionState.IDLE
        self.result = MatchResult.UNTERMINATED
        self._archived_record = None
        self._terminal_archived = False

        self._applied = []
        self._history = []
        self._captured = {chess.WHITE: [], chess.BLACK: []}

    def _record(self, applied: AppliedMove):
        self._applied.append(applied)
        self._history.append(applied.san)
        if applied.captured_type is not None:
            # The ledger of color X holds pieces of color X that were taken
            self._captured[applied.captured_color].append(applied.captured_type)

    def _maybe_schedule_engine_turn(self) -> bool:
        if not self.is_engine_turn():
            self._cancel_engine_task()
            return False

        self._cancel_engine_task()
        task = EngineTask(self._generation, self.config.engine_delay, self._run_engine_turn)
        self._engine_task = task
        task.start()
        logger.debug(f"Engine turn scheduled (difficulty={self.difficulty.value})")
        return True

    def _cancel_engine_task(self):
        task = self._engine_task
        if task is not None:
            task.cancel()
            self._engine_task = None

    def _is_current(self, task: EngineTask) -> bool:
        return (
            task is self._engine_task
            and not task.cancelled
            and task.generation == self._generation
            and self.is_engine_turn()
        )

    def _run_engine_turn(self, task: EngineTask):
        """Body of an EngineTask. Runs on the timer thread."""
        with self._gate:
            if not self._is_current(task):
                return
            board = self.board.copy()
            difficulty = self.difficulty

        move = self.search_engine.search(board, difficulty, should_stop=lambda: task.cancelled)

        with self._gate:
            if not self._is_current(task):
                logger.debug("Discarding stale engine move")
                return
            self._engine_task = None

            if move is None:
                logger.info("Engine has no move to play")
                self.check_terminal()
                return

            outcome = self.apply_move(move.from_square, move.to_square, move.promotion)
            if not outcome:
                logger.error(f"Engine produced a move the session rejected: {move.uci()}")

    def _save_snapshot(self):
        snapshot = SessionSnapshot(
            pgn=self.rules.to_pgn(self.board),
            mode=self.mode.value,
            difficulty=self.difficulty.value,
        )
        if snapshot == self._last_snapshot:
            return

        try:
            self.store.save_session_snapshot(snapshot)
        except PersistenceFailure as e:
            self._record_persistence_failure("save game", e)
            return
        self._last_snapshot = snapshot

    def _record_persistence_failure(self, action: str, error: PersistenceFailure):
        logger.error(f"Could not {action}: {error}")
        self.last_persistence_error = error

    def _notify(self, event: str, *args):
        try:
            getattr(self.feedback, event)(*args)
        except Exception as e:
            logger.warning(f"Feedback {event} failed: {e}")

    def __repr__(self) -> str:
        return (
            f"GameSession(state={self.state.value}, mode={self.mode.value}, "
            f"difficulty={self.difficulty.value}, moves={len(self._history)})"
        )
