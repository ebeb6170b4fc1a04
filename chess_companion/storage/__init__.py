"""
Storage Module

The persistence boundary: one saved game plus a library of archived
matches.

Key Components:
    - MatchStore (ABC): Interface used by GameSession
    - MemoryStore: In-process store (default)
    - JsonFileStore: Single JSON document on disk
    - MatchRecord / SessionSnapshot: Immutable stored values
"""

from chess_companion.storage.records import MatchRecord, SessionSnapshot
from chess_companion.storage.base import MatchStore
from chess_companion.storage.memory import MemoryStore
from chess_companion.storage.json_store import JsonFileStore

__all__ = ['MatchRecord', 'SessionSnapshot', 'MatchStore', 'MemoryStore', 'JsonFileStore']
