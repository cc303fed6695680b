"""
Tests for API layer.

Tests:
- API service methods
- HTTP endpoints, status codes and camelCase bodies
- Error handling
"""

import random

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    DrawRequest,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    PlayRequest,
    StartGameRequest,
)
from ..api.service import UnoService
from ..config import Settings
from ..engine_core.cards import Card, Color, WILD
from ..engine_core.engine import GameEngine
from .helpers import arrange_table, card, seat


class TestUnoService:
    """Tests for UnoService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return UnoService(engine=GameEngine(rng=random.Random(11)))

    def test_start_game(self, service):
        response = service.start_game(StartGameRequest(players=["Ada", "Bob"]))

        assert isinstance(response, GameStateResponse)
        assert response.current_player == "Ada"
        assert [p.card_count for p in response.players] == [7, 7]
        assert len(response.discard_pile) == 1
        assert response.deck_size == 93

    def test_start_game_invalid(self, service):
        response = service.start_game(StartGameRequest(players=["Solo"]))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_PLAYERS

    def test_get_state_without_game(self, service):
        response = service.get_state()
        assert response.error_code == ErrorCode.NO_GAME_IN_PROGRESS

    def test_draw_and_state(self, service):
        started = service.start_game(StartGameRequest(players=["Ada", "Bob"]))

        drawn = service.draw(DrawRequest(player_id=started.current_player_id))
        state = service.get_state()

        assert drawn.next_player == "Bob"
        assert state.players[0].card_count == 8
        assert state.current_player == "Bob"

    def test_play_wild(self, service):
        game = arrange_table(
            ["Ada", "Bob"],
            [[Card(Color.BLACK, WILD), card("Red", "1")], [card("Red", "2")]],
            card("Blue", "4"),
        )
        ids = seat(service.engine, game)

        response = service.play(PlayRequest(player_id=ids["Ada"], card_index=0, chosen_color="Yellow"))

        assert response.played_card.color == "Yellow"
        assert response.played_card.value == "Wild"
        assert response.next_player == "Bob"


class TestHTTP:
    """Tests for the FastAPI endpoints."""

    @pytest.fixture
    def service(self):
        return UnoService(engine=GameEngine(rng=random.Random(21)))

    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service=service, settings=Settings()))

    def _start(self, client, players=("A", "B")):
        response = client.post("/api/uno/start", json={"players": list(players)})
        assert response.status_code == 201
        return response.json()

    def test_start_returns_camel_case_state(self, client):
        body = self._start(client)

        assert body["gameId"]
        assert body["currentPlayer"] == "A"
        assert len(body["discardPile"]) == 1
        assert body["deckSize"] == 93
        assert [len(p["hand"]) for p in body["players"]] == [7, 7]
        assert set(body["players"][0]) >= {"id", "name", "hand", "cardCount"}

    def test_start_with_one_player(self, client):
        response = client.post("/api/uno/start", json={"players": ["A"]})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidPlayers"
        assert response.json()["error"]

    def test_start_without_players_field(self, client):
        response = client.post("/api/uno/start", json={})
        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidPlayers"

    @pytest.mark.parametrize("players", [["A", 3], "AB", None, {"A": "B"}])
    def test_start_with_malformed_players(self, client, players):
        response = client.post("/api/uno/start", json={"players": players})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidPlayers"

    def test_state_before_start(self, client):
        response = client.get("/api/uno/state")

        assert response.status_code == 400
        assert response.json()["errorCode"] == "NoGameInProgress"

    def test_state_after_start(self, client):
        started = self._start(client, ["A", "B", "C"])

        response = client.get("/api/uno/state")

        assert response.status_code == 200
        assert response.json()["gameId"] == started["gameId"]
        assert response.json()["currentPlayer"] == "A"

    def test_draw(self, client):
        started = self._start(client)
        a_id = started["players"][0]["id"]

        response = client.post("/api/uno/draw", json={"playerId": a_id})

        assert response.status_code == 200
        body = response.json()
        assert body["nextPlayer"] == "B"
        assert set(body["drawnCard"]) == {"color", "value"}

    def test_draw_unknown_player(self, client):
        self._start(client)

        response = client.post("/api/uno/draw", json={"playerId": "nobody"})

        assert response.status_code == 404
        assert response.json()["errorCode"] == "PlayerNotFound"

    def test_draw_not_your_turn(self, client):
        started = self._start(client)
        b_id = started["players"][1]["id"]

        response = client.post("/api/uno/draw", json={"playerId": b_id})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "NotYourTurn"

    def test_draw_deck_exhausted(self, client, service):
        game = arrange_table(["A", "B"], [[card("Red", "5")], [card("Red", "6")]], card("Red", "7"))
        ids = seat(service.engine, game)
        game.players[1].hand.extend(game.deck)
        game.deck = []

        response = client.post("/api/uno/draw", json={"playerId": ids["A"]})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "DeckExhausted"

    def test_malformed_body(self, client):
        response = client.post("/api/uno/draw", json={})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ValidationError"
        assert response.json()["details"]["errors"]

    def _rigged(self, service, a_hand, top=None):
        game = arrange_table(
            ["A", "B", "C"],
            [a_hand, [card("Red", "1")], [card("Red", "3")]],
            top or card("Red", "7"),
        )
        return game, seat(service.engine, game)

    def test_play_colored_card(self, client, service):
        game, ids = self._rigged(service, [card("Red", "Skip"), card("Blue", "2")])

        response = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": 0})

        assert response.status_code == 200
        assert response.json()["playedCard"] == {"color": "Red", "value": "Skip"}
        assert response.json()["nextPlayer"] == "C"

    def test_play_accepts_snake_case(self, client, service):
        game, ids = self._rigged(service, [card("Red", "2"), card("Blue", "2")])

        response = client.post("/api/uno/play", json={"player_id": ids["A"], "card_index": 0})

        assert response.status_code == 200
        assert response.json()["nextPlayer"] == "B"

    def test_play_draw_two_reports_penalty(self, client, service):
        game, ids = self._rigged(service, [card("Red", "+2"), card("Blue", "2")])

        body = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": 0}).json()

        assert body["penalizedPlayer"] == "B"
        assert body["cardsPenalized"] == 2
        assert body["nextPlayer"] == "C"

    def test_play_wild_needs_color(self, client, service):
        game, ids = self._rigged(service, [Card(Color.BLACK, WILD), card("Blue", "2")])

        response = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": 0})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidColorChoice"
        assert len(game.players[0].hand) == 2

    def test_play_wild_with_color(self, client, service):
        game, ids = self._rigged(service, [Card(Color.BLACK, WILD), card("Blue", "2")])

        response = client.post(
            "/api/uno/play",
            json={"playerId": ids["A"], "cardIndex": 0, "chosenColor": "Green"},
        )

        assert response.status_code == 200
        assert response.json()["playedCard"] == {"color": "Green", "value": "Wild"}
        state = client.get("/api/uno/state").json()
        assert state["discardPile"][-1] == {"color": "Green", "value": "Wild"}

    def test_play_invalid_move(self, client, service):
        game, ids = self._rigged(service, [card("Blue", "2"), card("Blue", "3")])

        response = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": 0})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidMove"

    def test_play_invalid_index(self, client, service):
        game, ids = self._rigged(service, [card("Red", "2")])

        response = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": 4})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "InvalidCardIndex"

    def test_play_unknown_player(self, client, service):
        self._rigged(service, [card("Red", "2")])

        response = client.post("/api/uno/play", json={"playerId": "ghost", "cardIndex": 0})

        assert response.status_code == 404

    def test_play_not_your_turn(self, client, service):
        game, ids = self._rigged(service, [card("Red", "2")])

        response = client.post("/api/uno/play", json={"playerId": ids["B"], "cardIndex": 0})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "NotYourTurn"

    def test_play_non_integer_index(self, client, service):
        game, ids = self._rigged(service, [card("Red", "2")])

        response = client.post("/api/uno/play", json={"playerId": ids["A"], "cardIndex": "first"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ValidationError"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "unotable"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/api/docs"
