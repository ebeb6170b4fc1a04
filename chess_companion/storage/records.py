"""
Stored data: archived matches and the saved-game snapshot.

Both are immutable and convert to/from plain dicts for JSON storage.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from chess_companion.board.rules import MatchResult


@dataclass(frozen=True)
class MatchRecord:
    """
    A finished (or abandoned) match in the library.

    Attributes:
        id: Unique record identifier
        timestamp: ISO-8601 UTC time the match was archived
        moves: SAN moves in order
        result: Outcome of the match
        opponent: "Computer (<difficulty>)" or the second player's label
        move_count: Number of plies played
    """

    id: str
    timestamp: str
    moves: tuple
    result: MatchResult
    opponent: str
    move_count: int

    @classmethod
    def create(
        cls,
        moves: Iterable[str],
        result: MatchResult,
        opponent: str,
        record_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> "MatchRecord":
        moves = tuple(moves)
        timestamp = timestamp or datetime.now(timezone.utc)
        return cls(
            id=record_id or uuid.uuid4().hex,
            timestamp=timestamp.isoformat(),
            moves=moves,
            result=result,
            opponent=opponent,
            move_count=len(moves),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.timestamp,
            "moves": list(self.moves),
            "result": self.result.value,
            "opponent": self.opponent,
            "moveCount": self.move_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchRecord":
        """
        Raises:
            KeyError: If a required field is missing
            ValueError: If the result token or a field type is invalid
        """
        moves = data["moves"]
        if not isinstance(moves, list) or not all(isinstance(m, str) for m in moves):
            raise ValueError(f"Record moves must be a list of strings, got {moves!r}")

        return cls(
            id=str(data["id"]),
            timestamp=str(data["date"]),
            moves=tuple(moves),
            result=MatchResult(data["result"]),
            opponent=str(data["opponent"]),
            move_count=int(data.get("moveCount", len(moves))),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Saved in-progress game.

    Attributes:
        pgn: Full move sequence as a PGN game record
        mode: GameMode value ("ai" or "local")
        difficulty: Difficulty value ("easy", "medium", "hard")
    """

    pgn: str
    mode: str
    difficulty: str

    def to_dict(self) -> Dict[str, Any]:
        return {"pgn": self.pgn, "gameMode": self.mode, "difficulty": self.difficulty}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionSnapshot":
        return cls(
            pgn=str(data["pgn"]),
            mode=str(data["gameMode"]),
            difficulty=str(data["difficulty"]),
        )
