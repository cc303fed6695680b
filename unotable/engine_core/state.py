"""
Game State - The mutable table owned by the engine.

Design principles:
- One GameState per engine; `start` replaces it
- Mutated in place by draw/play, never by the API layer
- Serializable through to_dict() for snapshots and persistence
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import uuid

from .cards import Card


class GameStatus(Enum):
    """High-level game status."""
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Player:
    """A seated player. Hand order is only meaningful to its owner."""
    name: str
    player_id: str = field(default_factory=new_id)
    hand: list[Card] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.player_id,
            "name": self.name,
            "hand": [card.to_dict() for card in self.hand],
        }


@dataclass
class GameState:
    """
    Complete state of the single table.

    The deck's top is the end of `deck`; the discard pile's top card is
    the end of `discard_pile`.
    """
    players: list[Player]
    deck: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    current_player_index: int = 0
    direction: int = 1
    status: GameStatus = GameStatus.IN_PROGRESS
    winner_id: str | None = None
    game_id: str = field(default_factory=new_id)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def is_finished(self) -> bool:
        return self.status == GameStatus.FINISHED

    @property
    def winner(self) -> Player | None:
        if self.winner_id is None:
            return None
        return self.get_player(self.winner_id)

    def has_valid_turn(self) -> bool:
        return 0 <= self.current_player_index < len(self.players)

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def index_after(self, steps: int = 1) -> int:
        """Seat index `steps` turns away in the current direction."""
        return (self.current_player_index + self.direction * steps) % len(self.players)

    def card_count(self) -> int:
        """Cards on the table: deck + discard pile + every hand."""
        return (
            len(self.deck)
            + len(self.discard_pile)
            + sum(len(p.hand) for p in self.players)
        )

    def to_dict(self) -> dict[str, Any]:
        winner = self.winner
        return {
            "game_id": self.game_id,
            "players": [p.to_dict() for p in self.players],
            "discard_pile": [card.to_dict() for card in self.discard_pile],
            "current_player": self.current_player.name,
            "current_player_id": self.current_player.player_id,
            "direction": self.direction,
            "deck_size": len(self.deck),
            "status": self.status.value,
            "winner": winner.name if winner else None,
        }
