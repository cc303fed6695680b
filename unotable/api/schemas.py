"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
JSON keys are camelCase (playerId, cardIndex, chosenColor); snake_case
field names are accepted on input too.

Error Codes:
- InvalidPlayers: players is not a list of 2-15 non-blank names
- NoGameInProgress: no game has been started
- PlayerNotFound: playerId is not seated at the table (HTTP 404)
- NotYourTurn: another player is to act
- InvalidCardIndex: cardIndex is outside the player's hand
- InvalidColorChoice: a wild was played without Red/Yellow/Green/Blue
- InvalidMove: card matches the top card by neither color nor value
- DeckExhausted: nothing left to draw or reshuffle
- GameOver: the game already has a winner
- ValidationError: request body does not match the schema
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_PLAYERS = "InvalidPlayers"
    NO_GAME_IN_PROGRESS = "NoGameInProgress"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    NOT_YOUR_TURN = "NotYourTurn"
    INVALID_CARD_INDEX = "InvalidCardIndex"
    INVALID_COLOR_CHOICE = "InvalidColorChoice"
    INVALID_MOVE = "InvalidMove"
    DECK_EXHAUSTED = "DeckExhausted"
    GAME_OVER = "GameOver"
    VALIDATION_ERROR = "ValidationError"


class GameStatus(str, Enum):
    """Game status values."""
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class ApiModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(ApiModel):
    """A card as shown to clients."""
    color: str = Field(description="Red, Yellow, Green, Blue or Black")
    value: str = Field(description="0-9, Skip, Reverse, +2, Wild or Wild +4")


class PlayerInfo(ApiModel):
    """A seated player with their hand."""
    id: str
    name: str
    hand: list[CardInfo] = Field(default_factory=list)
    card_count: int = 0


# =============================================================================
# Request Models
# =============================================================================

class StartGameRequest(ApiModel):
    """Request to start a new game."""
    players: Any = Field(
        default_factory=list,
        description="Player names in seat order (at least 2); checked by the engine",
    )


class DrawRequest(ApiModel):
    """Request to draw a card."""
    player_id: str = Field(..., description="ID of the player drawing")


class PlayRequest(ApiModel):
    """Request to play a card from hand."""
    player_id: str = Field(..., description="ID of the player playing")
    card_index: int = Field(..., description="Zero-based index into the player's hand")
    chosen_color: Optional[str] = Field(
        None, description="Required for Wild and Wild +4: Red, Yellow, Green or Blue"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(ApiModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")


class GameStateResponse(ApiModel):
    """Complete table state."""
    game_id: str
    players: list[PlayerInfo] = Field(default_factory=list)
    discard_pile: list[CardInfo] = Field(default_factory=list)
    current_player: str
    current_player_id: str
    direction: int = 1
    deck_size: int = 0
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[str] = None


class DrawResponse(ApiModel):
    """Response after drawing."""
    drawn_card: CardInfo
    next_player: str


class PlayResponse(ApiModel):
    """Response after playing a card."""
    played_card: CardInfo = Field(description="The card as it landed on the discard pile")
    next_player: str
    penalized_player: Optional[str] = Field(
        None, description="Player forced to draw by +2 or Wild +4"
    )
    cards_penalized: int = 0
    winner: Optional[str] = None


class HealthResponse(ApiModel):
    """Health check response."""
    status: str
    service: str
    version: str
