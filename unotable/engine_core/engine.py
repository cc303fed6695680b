"""
Game Engine - Owns the table and applies start/state/draw/play.

The engine is the single point of state mutation:
- Validates before mutating, so a rejected operation changes nothing
- Returns ActionResult with success/failure, never raises for rule violations
- Mirrors hands to the injected GameStore on a best-effort basis

Turn order:
    current_player_index moves by `direction` (+1 or -1) modulo the
    number of players. Every successful draw or play advances it once.
    Skip, two-player Reverse, +2 and Wild +4 add one extra advance, so
    the skipped (or penalized) player does not act.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence
import logging
import random

from .action import ActionResult, DrawOutcome, ErrorCode, PlayOutcome
from .cards import (
    Card, Color, DECK_SIZE, DRAW_TWO, HAND_SIZE, REVERSE, SKIP, WILD_DRAW_FOUR,
    generate_deck, shuffle_cards,
)
from .state import GameState, GameStatus, Player
from ..persistence.store import GameStore, NullStore

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
# Every player gets a full hand and one card is left to flip.
MAX_PLAYERS = (DECK_SIZE - 1) // HAND_SIZE

PENALTIES = {
    DRAW_TWO: 2,
    WILD_DRAW_FOUR: 4,
}


@dataclass
class GameEngine:
    """
    Engine for a single Uno table.

    Usage:
        engine = GameEngine()
        result = engine.start(["Ada", "Bob"])
        player_id = result.value["current_player_id"]
        engine.play(player_id, card_index=0)
    """
    store: GameStore = field(default_factory=NullStore)
    rng: random.Random = field(default_factory=random.Random)
    game: GameState | None = None

    # =========================================================================
    # Operations
    # =========================================================================

    def start(self, player_names: Sequence[str]) -> ActionResult:
        """
        Start a new game, replacing any game in progress.

        Deals HAND_SIZE cards to each player one at a time in seat order,
        then flips the topmost non-wild card to open the discard pile.
        """
        if not isinstance(player_names, (list, tuple)):
            return ActionResult.failure(
                "Players must be a list of names", ErrorCode.INVALID_PLAYERS
            )
        names = list(player_names)
        if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
            return ActionResult.failure(
                f"A game needs between {MIN_PLAYERS} and {MAX_PLAYERS} players, got {len(names)}",
                ErrorCode.INVALID_PLAYERS,
            )
        if any(not isinstance(name, str) or not name.strip() for name in names):
            return ActionResult.failure(
                "Player names must be non-empty strings", ErrorCode.INVALID_PLAYERS
            )

        players = [Player(name=name.strip()) for name in names]
        deck = generate_deck(self.rng)
        for _ in range(HAND_SIZE):
            for player in players:
                player.hand.append(deck.pop())

        game = GameState(
            players=players,
            deck=deck,
            discard_pile=[self._flip_first_card(deck)],
        )
        self.game = game

        logger.info(
            "Game %s started with %s; first card %s",
            game.game_id, ", ".join(p.name for p in players), game.top_card,
        )

        self._persist("game", self.store.record_game_start, game)
        for player in players:
            self._persist("player", self.store.record_player, game.game_id, player)

        return ActionResult.ok(game.to_dict(), [f"Game {game.game_id} started"])

    def state(self) -> ActionResult:
        """Snapshot of the table. Read-only."""
        game = self.game
        if game is None or not game.has_valid_turn():
            return ActionResult.failure("No game in progress", ErrorCode.NO_GAME_IN_PROGRESS)
        return ActionResult.ok(game.to_dict())

    def draw(self, player_id: str) -> ActionResult:
        """
        Draw one card for the current player and pass the turn.

        Reshuffles the discard pile into the deck when the deck is empty.
        """
        player, failure = self._acting_player(player_id)
        if failure:
            return failure
        game = self.game

        if not game.deck and not self._reshuffle():
            return ActionResult.failure(
                "The deck is empty and there is nothing to reshuffle",
                ErrorCode.DECK_EXHAUSTED,
            )

        card = game.deck.pop()
        player.hand.append(card)
        self._persist("hand", self.store.record_hand_update, game.game_id, player)

        game.current_player_index = game.index_after(1)
        next_player = game.current_player.name

        logger.debug("%s drew a card; %s is next", player.name, next_player)
        return ActionResult.ok(
            DrawOutcome(drawn_card=card, next_player=next_player),
            [f"{player.name} drew a card"],
        )

    def play(
        self,
        player_id: str,
        card_index: int,
        chosen_color: str | Color | None = None,
    ) -> ActionResult:
        """
        Play the card at card_index from the current player's hand.

        Wild cards need chosen_color and land on the discard pile in that
        color. Colored cards must match the top card by color or value.
        """
        player, failure = self._acting_player(player_id)
        if failure:
            return failure
        game = self.game

        if (
            not isinstance(card_index, int)
            or isinstance(card_index, bool)
            or not 0 <= card_index < len(player.hand)
        ):
            return ActionResult.failure(
                f"Card index {card_index!r} is not in a hand of {len(player.hand)} cards",
                ErrorCode.INVALID_CARD_INDEX,
            )

        card = player.hand[card_index]
        top = game.top_card

        if card.is_black:
            color = Color.parse_choice(chosen_color)
            if color is None:
                return ActionResult.failure(
                    f"{card.value} needs a color choice of "
                    + ", ".join(c.value for c in Color.playable()),
                    ErrorCode.INVALID_COLOR_CHOICE,
                )
            landed = card.resolve(color)
        elif top is not None and card.color != top.color and card.value != top.value:
            logger.debug("%s tried %s on %s", player.name, card, top)
            return ActionResult.failure(
                f"{card} does not match {top} by color or value",
                ErrorCode.INVALID_MOVE,
            )
        else:
            landed = card

        player.hand.pop(card_index)
        game.discard_pile.append(landed)
        self._persist("hand", self.store.record_hand_update, game.game_id, player)
        changes = [f"{player.name} played {landed}"]

        outcome = PlayOutcome(played_card=landed, next_player="")
        extra_steps = self._resolve_effect(landed, outcome, changes)
        game.current_player_index = game.index_after(1 + extra_steps)
        outcome.next_player = game.current_player.name

        if not player.hand:
            game.status = GameStatus.FINISHED
            game.winner_id = player.player_id
            outcome.winner = player.name
            changes.append(f"{player.name} won")
            logger.info("Game %s won by %s", game.game_id, player.name)

        return ActionResult.ok(outcome, changes)

    # =========================================================================
    # Effects and turn helpers
    # =========================================================================

    def _resolve_effect(self, card: Card, outcome: PlayOutcome, changes: list[str]) -> int:
        """Apply the played card's effect. Returns extra turn advances."""
        game = self.game

        if card.value in PENALTIES:
            target, given = self._give_cards_to_next_player(PENALTIES[card.value])
            outcome.penalized_player = target.name
            outcome.cards_penalized = given
            changes.append(f"{target.name} drew {given} and was skipped")
            return 1

        if card.value == SKIP:
            changes.append(f"{game.players[game.index_after(1)].name} was skipped")
            return 1

        if card.value == REVERSE:
            game.direction = -game.direction
            changes.append("Direction reversed")
            # Reversing between two players hands the turn straight back.
            return 1 if len(game.players) == 2 else 0

        return 0

    def _give_cards_to_next_player(self, count: int) -> tuple[Player, int]:
        """
        Move up to `count` cards from the deck to the next player's hand.

        Reshuffles as needed. Gives fewer cards, silently, when the deck
        cannot be replenished. Does not advance the turn.
        """
        game = self.game
        target = game.players[game.index_after(1)]

        given = 0
        for _ in range(count):
            if not game.deck and not self._reshuffle():
                break
            target.hand.append(game.deck.pop())
            given += 1

        if given < count:
            logger.info(
                "Only %d of %d penalty cards were available for %s", given, count, target.name
            )
        self._persist("hand", self.store.record_hand_update, game.game_id, target)
        return target, given

    def _reshuffle(self) -> bool:
        """
        Recycle the discard pile, except its top card, into the deck.

        Resolved wilds return to the deck as Black cards. Returns False
        when there is nothing under the top card.
        """
        game = self.game
        if len(game.discard_pile) <= 1:
            return False

        top = game.discard_pile[-1]
        recycled = [
            Card(color=Color.BLACK, value=c.value) if c.is_wild else c
            for c in game.discard_pile[:-1]
        ]
        game.deck = shuffle_cards(recycled + game.deck, self.rng)
        game.discard_pile = [top]

        logger.info("Game %s: reshuffled %d cards into the deck", game.game_id, len(recycled))
        return True

    def _flip_first_card(self, deck: list[Card]) -> Card:
        """Take the topmost non-wild card so the opening color is defined."""
        for index in range(len(deck) - 1, -1, -1):
            if not deck[index].is_black:
                return deck.pop(index)
        return deck.pop()

    def _acting_player(self, player_id: str) -> tuple[Player | None, ActionResult | None]:
        """Resolve the player and check it is their turn."""
        game = self.game
        if game is None or not game.has_valid_turn():
            return None, ActionResult.failure(
                "No game in progress", ErrorCode.NO_GAME_IN_PROGRESS
            )

        player = game.get_player(player_id)
        if player is None:
            return None, ActionResult.failure(
                f"Player {player_id} not found", ErrorCode.PLAYER_NOT_FOUND
            )

        if game.is_finished:
            winner = game.winner
            return None, ActionResult.failure(
                f"The game is over; {winner.name if winner else 'nobody'} won",
                ErrorCode.GAME_OVER,
            )

        if game.current_player.player_id != player_id:
            return None, ActionResult.failure(
                f"It is {game.current_player.name}'s turn, not {player.name}'s",
                ErrorCode.NOT_YOUR_TURN,
            )

        return player, None

    def _persist(self, what: str, call: Callable[..., Any], *args: Any) -> None:
        """Run a store call; failures are logged and never propagate."""
        try:
            call(*args)
        except Exception:
            game_id = self.game.game_id if self.game else None
            logger.exception("Failed to persist %s for game %s", what, game_id)
