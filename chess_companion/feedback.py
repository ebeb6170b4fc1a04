"""
Feedback notifications.

Fire-and-forget hooks a front end can use for haptics or sounds. The game
core calls them after state changes and never looks at what they return.
"""

import logging

from chess_companion.board.rules import MatchResult

logger = logging.getLogger(__name__)


class FeedbackSink:
    """No-op feedback. Subclass and override the events you care about."""

    def move_applied(self, is_capture: bool) -> None:
        pass

    def check(self) -> None:
        pass

    def game_over(self, result: MatchResult) -> None:
        pass


NullFeedback = FeedbackSink


class LoggingFeedback(FeedbackSink):
    """Writes every notification to the log at DEBUG level."""

    def move_applied(self, is_capture: bool) -> None:
        logger.debug(f"Feedback: {'capture' if is_capture else 'move'}")

    def check(self) -> None:
        logger.debug("Feedback: check")

    def game_over(self, result: MatchResult) -> None:
        logger.debug(f"Feedback: game over ({result.value})")
