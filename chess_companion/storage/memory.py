"""In-process store, used by default and in tests."""

import threading
from typing import List, Optional

from chess_companion.storage.base import MatchStore
from chess_companion.storage.records import MatchRecord, SessionSnapshot


class MemoryStore(MatchStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: Optional[SessionSnapshot] = None
        self._library: List[MatchRecord] = []

    def save_session_snapshot(self, snapshot: SessionSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def load_session_snapshot(self) -> Optional[SessionSnapshot]:
        with self._lock:
            return self._snapshot

    def append_match_record(self, record: MatchRecord) -> None:
        with self._lock:
            self._library.insert(0, record)

    def list_match_records(self) -> List[MatchRecord]:
        with self._lock:
            return list(self._library)

    def delete_match_record(self, record_id: str) -> bool:
        with self._lock:
            remaining = [r for r in self._library if r.id != record_id]
            removed = len(remaining) != len(self._library)
            self._library = remaining
            return removed
