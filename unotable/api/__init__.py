"""
API Module - HTTP interface to the table.

Clients:
1. Start a game with a list of player names
2. Read the table state
3. Draw or play cards on their turn

All state lives in the engine owned by the service. One table per process.
"""

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
    HealthResponse,
    # Shared
    CardInfo,
    PlayerInfo,
    ErrorCode,
)
from .service import UnoService
from .app import create_app

__all__ = [
    # Requests
    "StartGameRequest",
    "DrawRequest",
    "PlayRequest",
    # Responses
    "GameStateResponse",
    "DrawResponse",
    "PlayResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "CardInfo",
    "PlayerInfo",
    "ErrorCode",
    # Service
    "UnoService",
    "create_app",
]
