"""
Exceptions raised across the storage and review boundaries.

Illegal moves are not exceptions: GameSession.apply_move reports them with
an InvalidMove result value. A search with no legal moves returns None.
"""


class ChessCompanionError(Exception):
    """Base class for all package errors."""


class PersistenceFailure(ChessCompanionError):
    """A storage read or write failed.

    The in-memory session keeps working without persistence when this is
    raised by a store.
    """


class CorruptedRecord(ChessCompanionError):
    """An archived match does not replay cleanly against the rules engine."""

    def __init__(self, record_id: str, ply: int, san: str, reason: str = ""):
        self.record_id = record_id
        self.ply = ply
        self.san = san
        self.reason = reason
        message = f"Record {record_id}: move {ply + 1} ({san!r}) does not replay"
        if reason:
            message += f": {reason}"
        super().__init__(message)
