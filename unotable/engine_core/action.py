"""
Action Results - Tagged success/failure values returned by the engine.

Engine operations never raise for a rule violation. They return an
ActionResult carrying either a value or an ErrorCode plus a
human-readable message, and the API layer decides how to present it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import Card


class ErrorCode(str, Enum):
    """Failure kinds an engine operation can report."""
    INVALID_PLAYERS = "InvalidPlayers"
    NO_GAME_IN_PROGRESS = "NoGameInProgress"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    NOT_YOUR_TURN = "NotYourTurn"
    INVALID_CARD_INDEX = "InvalidCardIndex"
    INVALID_COLOR_CHOICE = "InvalidColorChoice"
    INVALID_MOVE = "InvalidMove"
    DECK_EXHAUSTED = "DeckExhausted"
    GAME_OVER = "GameOver"


@dataclass
class DrawOutcome:
    """Result of a successful draw."""
    drawn_card: Card
    next_player: str


@dataclass
class PlayOutcome:
    """
    Result of a successful play.

    played_card is the card as it landed on the discard pile, so a wild
    carries its chosen color.
    """
    played_card: Card
    next_player: str
    penalized_player: str | None = None
    cards_penalized: int = 0
    winner: str | None = None


@dataclass
class ActionResult:
    """
    Result of an engine operation.

    Contains:
    - Whether the operation succeeded
    - The value (snapshot or outcome) on success
    - Error message and code on failure
    - Human-readable changes for logs and UI
    """
    success: bool
    value: Any | None = None
    error: str | None = None
    error_code: ErrorCode | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, value: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, value=value, state_changes=changes or [])
