"""
JSON file store.

Keeps the saved game and the match library in one JSON document:

    {
        "saved_game": {"pgn": "...", "gameMode": "ai", "difficulty": "medium"},
        "library": [{"id": "...", "date": "...", "moves": [...], ...}, ...]
    }

Writes go to a temporary file that then replaces the original, so a crash
mid-write never leaves a truncated document behind.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from chess_companion.exceptions import PersistenceFailure
from chess_companion.storage.base import MatchStore
from chess_companion.storage.records import MatchRecord, SessionSnapshot

logger = logging.getLogger(__name__)

SAVED_GAME_KEY = "saved_game"
LIBRARY_KEY = "library"


class JsonFileStore(MatchStore):
    """Store backed by a single JSON file."""

    def __init__(self, path: Path):
        """
        Args:
            path: Location of the JSON document (created on first write)
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            # ValueError covers both JSONDecodeError and UnicodeDecodeError
            raise PersistenceFailure(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceFailure(f"Unexpected document in {self.path}: {type(data).__name__}")
        return data

    def _library(self, data: Dict[str, Any]) -> List[Any]:
        library = data.get(LIBRARY_KEY, [])
        if not isinstance(library, list):
            raise PersistenceFailure(f"Unexpected library in {self.path}: {type(library).__name__}")
        return library

    def _write(self, data: Dict[str, Any]):
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceFailure(f"Cannot write {self.path}: {e}") from e

    def save_session_snapshot(self, snapshot: SessionSnapshot) -> None:
        with self._lock:
            data = self._read()
            data[SAVED_GAME_KEY] = snapshot.to_dict()
            self._write(data)
        logger.debug(f"Saved game snapshot to {self.path}")

    def load_session_snapshot(self) -> Optional[SessionSnapshot]:
        with self._lock:
            saved = self._read().get(SAVED_GAME_KEY)

        if saved is None:
            return None
        try:
            return SessionSnapshot.from_dict(saved)
        except (KeyError, TypeError) as e:
            raise PersistenceFailure(f"Saved game in {self.path} is malformed: {e}") from e

    def append_match_record(self, record: MatchRecord) -> None:
        with self._lock:
            data = self._read()
            library = self._library(data)
            library.insert(0, record.to_dict())
            data[LIBRARY_KEY] = library
            self._write(data)
        logger.info(f"Archived match {record.id} ({record.result.value}, {record.move_count} moves)")

    def list_match_records(self) -> List[MatchRecord]:
        with self._lock:
            entries = self._library(self._read())

        records = []
        for entry in entries:
            try:
                records.append(MatchRecord.from_dict(entry))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed library entry: {e}")
        return records

    def delete_match_record(self, record_id: str) -> bool:
        with self._lock:
            data = self._read()
            library = self._library(data)
            # Malformed entries are kept; list_match_records skips them
            remaining = [
                entry for entry in library
                if not (isinstance(entry, dict) and entry.get("id") == record_id)
            ]
            if len(remaining) == len(library):
                return False
            data[LIBRARY_KEY] = remaining
            self._write(data)

        logger.info(f"Deleted match {record_id}")
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={str(self.path)!r})"
