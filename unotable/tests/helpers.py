"""Helpers for building deterministic tables in tests."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..engine_core.cards import Card, Color, build_deck
from ..engine_core.engine import GameEngine
from ..engine_core.state import GameState, Player
from ..persistence.store import GameStore


def card(color: str, value: str) -> Card:
    """Card("Red", "5") shorthand."""
    return Card(color=Color(color), value=value)


def arrange_table(
    names: Sequence[str],
    hands: Sequence[Iterable[Card]],
    top: Card,
) -> GameState:
    """
    Build a table with exact hands and top card.

    Cards are taken out of a full, unshuffled deck; whatever is left
    becomes the draw deck, so the table still holds all 108 cards.
    """
    pool = build_deck()

    def take(c: Card) -> Card:
        pool.remove(c)
        return c

    players = [
        Player(name=name, hand=[take(c) for c in hand])
        for name, hand in zip(names, hands)
    ]
    discard = [take(top)]
    return GameState(players=players, deck=pool, discard_pile=discard)


def seat(engine: GameEngine, game: GameState) -> dict[str, str]:
    """Install a rigged game on the engine; returns name -> player_id."""
    engine.game = game
    return {p.name: p.player_id for p in game.players}


def move_deck_to_hand(game: GameState, player_index: int, keep: int = 0) -> None:
    """Empty the draw deck (except `keep` cards) into a player's hand."""
    moved = game.deck[keep:]
    game.deck = game.deck[:keep]
    game.players[player_index].hand.extend(moved)


class RecordingStore(GameStore):
    """Store that remembers every call."""

    def __init__(self):
        self.games: list[str] = []
        self.players: list[tuple[str, str]] = []
        self.hand_updates: list[tuple[str, str, int]] = []

    def record_game_start(self, game):
        self.games.append(game.game_id)

    def record_player(self, game_id, player):
        self.players.append((game_id, player.player_id))

    def record_hand_update(self, game_id, player):
        self.hand_updates.append((game_id, player.player_id, len(player.hand)))


class ExplodingStore(GameStore):
    """Store whose every call fails."""

    def record_game_start(self, game):
        raise RuntimeError("database unavailable")

    def record_player(self, game_id, player):
        raise RuntimeError("database unavailable")

    def record_hand_update(self, game_id, player):
        raise RuntimeError("database unavailable")
