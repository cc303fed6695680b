"""
Game Store - Best-effort mirror of games and hands.

The store:
- Receives "insert game", "insert player" and "update hand" calls
- Is never read back by the engine
- Stores on local disk (one JSON document per game) or nowhere at all

The in-memory GameState is the single source of truth. The engine wraps
every store call and only logs failures; see GameEngine._persist.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TYPE_CHECKING
import json
import logging
import time

if TYPE_CHECKING:
    from ..engine_core.state import GameState, Player

logger = logging.getLogger(__name__)


class GameStore(ABC):
    """Persistence capability injected into the engine."""

    @abstractmethod
    def record_game_start(self, game: GameState) -> None:
        """Insert a newly started game."""

    @abstractmethod
    def record_player(self, game_id: str, player: Player) -> None:
        """Insert a player seated at a game."""

    @abstractmethod
    def record_hand_update(self, game_id: str, player: Player) -> None:
        """Overwrite the stored hand of a player."""


class NullStore(GameStore):
    """Store that keeps nothing. Used when no store directory is configured."""

    def record_game_start(self, game: GameState) -> None:
        logger.debug("Game %s started (not persisted)", game.game_id)

    def record_player(self, game_id: str, player: Player) -> None:
        pass

    def record_hand_update(self, game_id: str, player: Player) -> None:
        pass


class JsonFileStore(GameStore):
    """
    File-based store: one JSON document per game.

    Usage:
        store = JsonFileStore("~/.unotable/games")
        engine = GameEngine(store=store)

    Layout of <store_dir>/<game_id>.json:
        {"game_id": ..., "created_at": ..., "updated_at": ...,
         "players": {<player_id>: {"name": ..., "hand": [...]}}}
    """

    def __init__(self, store_dir: str | Path | None = None):
        if store_dir is None:
            store_dir = Path.home() / ".unotable" / "games"
        self.store_dir = Path(store_dir).expanduser()

        # Ensure store directory exists
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def record_game_start(self, game: GameState) -> None:
        now = time.time()
        document = {
            "game_id": game.game_id,
            "created_at": now,
            "updated_at": now,
            "players": {},
        }
        self._save(game.game_id, document)

    def record_player(self, game_id: str, player: Player) -> None:
        document = self._load(game_id)
        document["players"][player.player_id] = {
            "name": player.name,
            "hand": [card.to_dict() for card in player.hand],
        }
        self._save(game_id, document)

    def record_hand_update(self, game_id: str, player: Player) -> None:
        document = self._load(game_id)
        entry = document["players"].get(player.player_id)
        if entry is None:
            raise KeyError(f"Player {player.player_id} was never recorded for game {game_id}")
        entry["hand"] = [card.to_dict() for card in player.hand]
        self._save(game_id, document)

    def load_game(self, game_id: str) -> dict[str, Any]:
        """Read back a stored game document (for inspection and tests)."""
        return self._load(game_id)

    def list_games(self) -> list[str]:
        """List IDs of all stored games."""
        if not self.store_dir.exists():
            return []
        return [f.stem for f in self.store_dir.glob("*.json")]

    def _get_path(self, game_id: str) -> Path:
        return self.store_dir / f"{game_id}.json"

    def _load(self, game_id: str) -> dict[str, Any]:
        with open(self._get_path(game_id), "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, game_id: str, document: dict[str, Any]) -> None:
        """Write to a sibling temp file, then swap it in so readers never see half a document."""
        document["updated_at"] = time.time()
        path = self._get_path(game_id)
        tmp = path.with_name(path.name + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
        tmp.replace(path)
