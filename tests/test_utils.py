"""
Unit Tests for Utilities

Tests for logger setup, logging feedback and the tactics suite runner.
"""

import logging

from chess_companion.board import MatchResult
from chess_companion.feedback import LoggingFeedback
from chess_companion.search import Difficulty, SearchEngine
from chess_companion.utils import TACTICAL_POSITIONS, run_tactics, setup_logger


class TestSetupLogger:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "game.log"

        logger = setup_logger(debug=True, log_file=log_file)
        logger.info("New game")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert "[INFO] New game" in log_file.read_text()

        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_replaces_handlers(self):
        setup_logger()
        logger = setup_logger()

        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        logger.handlers.clear()


class TestLoggingFeedback:
    def test_logs_events(self, caplog):
        feedback = LoggingFeedback()

        with caplog.at_level(logging.DEBUG, logger="chess_companion.feedback"):
            feedback.move_applied(True)
            feedback.check()
            feedback.game_over(MatchResult.DRAW)

        assert "capture" in caplog.text
        assert "check" in caplog.text
        assert "1/2-1/2" in caplog.text


class TestRunTactics:
    def test_capture_positions_at_easy(self):
        positions = [p for p in TACTICAL_POSITIONS if p.min_difficulty == Difficulty.EASY]

        result = run_tactics(SearchEngine(seed=0), Difficulty.EASY, positions, verbose=False)

        assert result['total'] == len(positions)
        assert result['score'] == result['total']
        assert result['percentage'] == 100

    def test_full_suite_at_medium(self):
        result = run_tactics(SearchEngine(seed=0), Difficulty.MEDIUM, verbose=False)

        assert result['score'] == len(TACTICAL_POSITIONS)
        assert all(r.nodes_searched > 0 for r in result['results'])
