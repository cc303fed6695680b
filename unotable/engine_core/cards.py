"""
Cards - Colors, card values and the 108-card deck factory.

Deck composition:
- 4 colors x (0-9, Skip, Reverse, +2)
  - one "0" per color, two of every other value: 25 cards per color, 100 colored
- 4 Black "Wild" and 4 Black "Wild +4"
- Total: 108 cards

The deck is returned shuffled with random.Random.shuffle (Fisher-Yates).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random


class Color(str, Enum):
    """Card colors. BLACK only appears on unresolved wild cards."""
    RED = "Red"
    YELLOW = "Yellow"
    GREEN = "Green"
    BLUE = "Blue"
    BLACK = "Black"

    @classmethod
    def playable(cls) -> tuple[Color, ...]:
        """Colors a wild card may be resolved to."""
        return (cls.RED, cls.YELLOW, cls.GREEN, cls.BLUE)

    @classmethod
    def parse_choice(cls, value: str | Color | None) -> Color | None:
        """Return the playable color named by value, or None."""
        if value is None:
            return None
        if isinstance(value, Color):
            return value if value in cls.playable() else None
        for color in cls.playable():
            if color.value.lower() == str(value).strip().lower():
                return color
        return None


DIGITS = tuple(str(n) for n in range(10))
SKIP = "Skip"
REVERSE = "Reverse"
DRAW_TWO = "+2"
WILD = "Wild"
WILD_DRAW_FOUR = "Wild +4"

COLORED_VALUES = DIGITS + (SKIP, REVERSE, DRAW_TWO)
WILD_VALUES = (WILD, WILD_DRAW_FOUR)
CARD_VALUES = COLORED_VALUES + WILD_VALUES

DECK_SIZE = 108
HAND_SIZE = 7


@dataclass(frozen=True)
class Card:
    """
    A single card.

    Wild cards are Black while in the deck or a hand. Once played they
    land on the discard pile carrying the chosen color instead.
    """
    color: Color
    value: str

    def __post_init__(self) -> None:
        if self.value not in CARD_VALUES:
            raise ValueError(f"Invalid card value: {self.value!r}")
        if self.color is Color.BLACK and self.value not in WILD_VALUES:
            raise ValueError(f"Black is only valid on wild cards, not {self.value!r}")

    @property
    def is_wild(self) -> bool:
        return self.value in WILD_VALUES

    @property
    def is_black(self) -> bool:
        return self.color is Color.BLACK

    def resolve(self, chosen: Color) -> Card:
        """Return the card as it sits on the discard pile after a color choice."""
        return Card(color=chosen, value=self.value)

    def to_dict(self) -> dict[str, str]:
        return {"color": self.color.value, "value": self.value}

    def __str__(self) -> str:
        if self.is_black:
            return self.value
        return f"{self.color.value} {self.value}"


def build_deck() -> list[Card]:
    """Build the 108 cards in a fixed, unshuffled order."""
    cards: list[Card] = []
    for color in Color.playable():
        for value in COLORED_VALUES:
            copies = 1 if value == "0" else 2
            cards.extend(Card(color=color, value=value) for _ in range(copies))

    for value in WILD_VALUES:
        cards.extend(Card(color=Color.BLACK, value=value) for _ in range(4))

    return cards


def shuffle_cards(cards: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Shuffle cards in place (Fisher-Yates) and return the same list."""
    (rng or random).shuffle(cards)
    return cards


def generate_deck(rng: random.Random | None = None) -> list[Card]:
    """
    Create a fresh, shuffled 108-card deck.

    Args:
        rng: Optional random source for reproducible games

    Returns:
        List of cards; the top of the deck is the end of the list
    """
    return shuffle_cards(build_deck(), rng)
