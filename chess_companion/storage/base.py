"""
Abstract Match Store Interface

The persistence boundary GameSession talks to. A store keeps:

    1. One saved-game snapshot (the game in progress)
    2. A library of archived matches, most recent first

Implementations report storage problems by raising PersistenceFailure.
Callers in the core catch it, log it, and keep the in-memory game alive.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from chess_companion.storage.records import MatchRecord, SessionSnapshot


class MatchStore(ABC):
    """Abstract base class for snapshot and match library storage."""

    @abstractmethod
    def save_session_snapshot(self, snapshot: SessionSnapshot) -> None:
        """Replace the saved game with `snapshot`."""
        pass

    @abstractmethod
    def load_session_snapshot(self) -> Optional[SessionSnapshot]:
        """Return the saved game, or None if nothing is saved."""
        pass

    @abstractmethod
    def append_match_record(self, record: MatchRecord) -> None:
        """Add a match to the front of the library."""
        pass

    @abstractmethod
    def list_match_records(self) -> List[MatchRecord]:
        """All archived matches, most recent first."""
        pass

    @abstractmethod
    def delete_match_record(self, record_id: str) -> bool:
        """Remove a match. Returns True if a record was removed."""
        pass

    def get_match_record(self, record_id: str) -> Optional[MatchRecord]:
        for record in self.list_match_records():
            if record.id == record_id:
                return record
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
