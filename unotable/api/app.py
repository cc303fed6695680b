"""
FastAPI Application - REST API for the Uno table.

Endpoints:
    POST   /api/uno/start   Start a game (replaces the current one)
    GET    /api/uno/state   Get the table state
    POST   /api/uno/draw    Draw a card
    POST   /api/uno/play    Play a card from hand
    GET    /health          Health check

Failures are returned as ErrorResponse. PlayerNotFound maps to 404,
every other engine failure to 400. Malformed bodies are reported as 400
ValidationError rather than FastAPI's default 422.

Handlers are async and call the synchronous engine directly, so requests
are applied one at a time on the event loop.
"""

from typing import Optional, Union
import logging
import random

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..engine_core import GameEngine
from ..persistence import GameStore, JsonFileStore, NullStore
from .service import UnoService
from .schemas import (
    # Request models
    StartGameRequest,
    DrawRequest,
    PlayRequest,
    # Response models
    GameStateResponse,
    DrawResponse,
    PlayResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {ErrorCode.PLAYER_NOT_FOUND}


def build_store(settings: Settings) -> GameStore:
    """JsonFileStore when a store directory is configured, else NullStore."""
    if settings.store_dir:
        return JsonFileStore(settings.store_dir)
    return NullStore()


def create_app(service: Optional[UnoService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional UnoService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Unotable API",
        description="""
Single-table Uno engine.

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `InvalidPlayers` | 400 | Players is not a list of 2-15 non-blank names |
| `NoGameInProgress` | 400 | No game has been started |
| `PlayerNotFound` | 404 | Unknown player id |
| `NotYourTurn` | 400 | Another player is to act |
| `InvalidCardIndex` | 400 | Card index outside the hand |
| `InvalidColorChoice` | 400 | Wild played without a valid color |
| `InvalidMove` | 400 | Card matches neither color nor value |
| `DeckExhausted` | 400 | Nothing left to draw |
| `GameOver` | 400 | The game already has a winner |
| `ValidationError` | 400 | Malformed request body |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if service is None:
        engine = GameEngine(store=build_store(settings), rng=random.Random(settings.seed))
        service = UnoService(engine=engine)
    app.state.service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json", by_alias=True),
        )

    def error_from(response: ErrorResponse) -> JSONResponse:
        status_code = 404 if response.error_code in NOT_FOUND_CODES else 400
        return make_error_response(
            response.error_code, response.error, status_code, response.details
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request body does not match the expected schema",
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/uno/start",
        response_model=GameStateResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse, "description": "Invalid players"}},
        tags=["Game"],
        summary="Start a new game",
    )
    async def start_game(body: StartGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Start a new game with the given player names, in seat order.

        Any game in progress is discarded. The first player acts first.

        **Request Body:**
        ```json
        {"players": ["Ada", "Bob", "Cy"]}
        ```
        """
        response = service.start_game(body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.get(
        "/api/uno/state",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse, "description": "No game in progress"}},
        tags=["Game"],
        summary="Get the table state",
    )
    async def get_state() -> Union[GameStateResponse, JSONResponse]:
        """Get every hand, the discard pile and whose turn it is."""
        response = service.get_state()
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/uno/draw",
        response_model=DrawResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Not your turn or deck exhausted"},
            404: {"model": ErrorResponse, "description": "Player not found"},
        },
        tags=["Game"],
        summary="Draw a card",
    )
    async def draw_card(body: DrawRequest) -> Union[DrawResponse, JSONResponse]:
        """Draw one card. The turn passes to the next player."""
        response = service.draw(body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    @app.post(
        "/api/uno/play",
        response_model=PlayResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Illegal play"},
            404: {"model": ErrorResponse, "description": "Player not found"},
        },
        tags=["Game"],
        summary="Play a card",
    )
    async def play_card(body: PlayRequest) -> Union[PlayResponse, JSONResponse]:
        """
        Play the card at `cardIndex` from the player's hand.

        **Request Body:**
        ```json
        {"playerId": "3f2a...", "cardIndex": 2, "chosenColor": "Blue"}
        ```
        `chosenColor` is only read for Wild and Wild +4.
        """
        response = service.play(body)
        if isinstance(response, ErrorResponse):
            return error_from(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="unotable",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Unotable API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn unotable.api.app:app
app = create_app()
