"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates request schemas to engine calls
2. Converts engine results to response schemas
3. Turns engine failures into ErrorResponse

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .schemas import (
    # Requests
    StartGameRequest,
    DrawRequest,
    PlayRequest,
    # Responses
    GameStateResponse,
    DrawResponse,
    PlayResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    PlayerInfo,
    # Enums
    ErrorCode,
)
from ..engine_core import ActionResult, Card, GameEngine


@dataclass
class UnoService:
    """
    Main API service.

    Usage:
        service = UnoService()

        state = service.start_game(StartGameRequest(players=["Ada", "Bob"]))
        service.draw(DrawRequest(player_id=state.current_player_id))
    """
    engine: GameEngine = field(default_factory=GameEngine)

    def start_game(self, request: StartGameRequest) -> GameStateResponse | ErrorResponse:
        """Start a new game, replacing the current one."""
        result = self.engine.start(request.players)
        if not result.success:
            return self._error(result)
        return self._state_to_response(result.value)

    def get_state(self) -> GameStateResponse | ErrorResponse:
        """Get the full table state."""
        result = self.engine.state()
        if not result.success:
            return self._error(result)
        return self._state_to_response(result.value)

    def draw(self, request: DrawRequest) -> DrawResponse | ErrorResponse:
        """Draw a card for the requesting player."""
        result = self.engine.draw(request.player_id)
        if not result.success:
            return self._error(result)
        outcome = result.value
        return DrawResponse(
            drawn_card=self._card_info(outcome.drawn_card),
            next_player=outcome.next_player,
        )

    def play(self, request: PlayRequest) -> PlayResponse | ErrorResponse:
        """Play a card from the requesting player's hand."""
        result = self.engine.play(
            request.player_id,
            request.card_index,
            request.chosen_color,
        )
        if not result.success:
            return self._error(result)
        outcome = result.value
        return PlayResponse(
            played_card=self._card_info(outcome.played_card),
            next_player=outcome.next_player,
            penalized_player=outcome.penalized_player,
            cards_penalized=outcome.cards_penalized,
            winner=outcome.winner,
        )

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _error(self, result: ActionResult) -> ErrorResponse:
        return ErrorResponse(
            error=result.error or "Request failed",
            error_code=ErrorCode(result.error_code.value),
        )

    def _card_info(self, card: Card) -> CardInfo:
        return CardInfo(color=card.color.value, value=card.value)

    def _state_to_response(self, snapshot: dict[str, Any]) -> GameStateResponse:
        return GameStateResponse(
            game_id=snapshot["game_id"],
            players=[
                PlayerInfo(
                    id=p["id"],
                    name=p["name"],
                    hand=[CardInfo(**c) for c in p["hand"]],
                    card_count=len(p["hand"]),
                )
                for p in snapshot["players"]
            ],
            discard_pile=[CardInfo(**c) for c in snapshot["discard_pile"]],
            current_player=snapshot["current_player"],
            current_player_id=snapshot["current_player_id"],
            direction=snapshot["direction"],
            deck_size=snapshot["deck_size"],
            status=snapshot["status"],
            winner=snapshot["winner"],
        )
