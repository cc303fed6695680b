"""
Engine Core - Uno game state and rules.

The engine is the runtime that:
1. Builds and shuffles the deck
2. Deals hands and opens the discard pile
3. Checks whose turn it is and whether a move is legal
4. Resolves Skip, Reverse, +2 and wild effects
5. Reshuffles the discard pile into an exhausted deck
"""

from .cards import Card, Color, generate_deck, DECK_SIZE, HAND_SIZE
from .state import GameState, GameStatus, Player
from .action import ActionResult, DrawOutcome, ErrorCode, PlayOutcome
from .engine import GameEngine, MIN_PLAYERS, MAX_PLAYERS

__all__ = [
    "Card",
    "Color",
    "generate_deck",
    "DECK_SIZE",
    "HAND_SIZE",
    "GameState",
    "GameStatus",
    "Player",
    "ActionResult",
    "DrawOutcome",
    "ErrorCode",
    "PlayOutcome",
    "GameEngine",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
]
