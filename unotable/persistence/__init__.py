"""
Persistence Module - Best-effort mirror of games and hands.

Nothing here is read back during play. The engine keeps the
authoritative state in memory and only logs store failures.
"""

from .store import GameStore, NullStore, JsonFileStore

__all__ = [
    "GameStore",
    "NullStore",
    "JsonFileStore",
]
