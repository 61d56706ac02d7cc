from __future__ import annotations

import functools
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import DeckExhaustedError

ACE = 1
KING = 13
# RANKS[rank - 1] is the label character for a rank.
RANKS = "A23456789TJQK"
DECK_SIZE = 52


class Suit(str, Enum):
    SPADE = "s"
    CLUB = "c"
    DIAMOND = "d"
    HEART = "h"


# Order matters: a card's deck index is (rank - 1) * 4 + suit position.
SUITS: Tuple[Suit, ...] = (Suit.SPADE, Suit.CLUB, Suit.DIAMOND, Suit.HEART)


def high_value(rank: int) -> int:
    """Ace-high value of a rank: 2..13 unchanged, ace becomes 14."""
    return 14 if rank == ACE else rank


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Card:
    """A playing card. Equality and ordering look at rank only, ace high."""

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, int) or not ACE <= self.rank <= KING:
            raise ValueError(f"Invalid rank: {self.rank}")
        try:
            suit = Suit(self.suit)
        except ValueError:
            raise ValueError(f"Invalid suit: {self.suit}") from None
        object.__setattr__(self, "suit", suit)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return high_value(self.rank) < high_value(other.rank)

    def __hash__(self) -> int:
        return hash(self.rank)

    def __repr__(self) -> str:
        return f"Card({self.label})"

    @property
    def value(self) -> int:
        return high_value(self.rank)

    @property
    def label(self) -> str:
        return f"{RANKS[self.rank - 1]}{self.suit.value}"

    @property
    def index(self) -> int:
        return (self.rank - 1) * len(SUITS) + SUITS.index(self.suit)

    @classmethod
    def from_index(cls, index: int) -> "Card":
        if not 0 <= index < DECK_SIZE:
            raise ValueError(f"Invalid card index: {index}")
        return cls(index // len(SUITS) + 1, SUITS[index % len(SUITS)])

    def same_card(self, other: "Card") -> bool:
        return self.rank == other.rank and self.suit == other.suit


@dataclass(frozen=True)
class Deck:
    """Remaining card indices. Cards are drawn from the end of the tuple."""

    cards: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.cards)

    def draw(self, count: int = 1) -> Tuple[List[Card], "Deck"]:
        if count > len(self.cards):
            raise DeckExhaustedError("Not enough cards left in deck")
        split = len(self.cards) - count
        drawn = [Card.from_index(idx) for idx in reversed(self.cards[split:])]
        return drawn, Deck(self.cards[:split])


def build_deck(seed: Optional[int] = None) -> Deck:
    rng = random.Random(seed)
    order = list(range(DECK_SIZE))
    rng.shuffle(order)
    return Deck(tuple(order))


def stacked_deck(top: Sequence[Card]) -> Deck:
    """Deck that deals ``top`` first, in order, followed by every other card."""
    wanted = [card.index for card in top]
    taken = set(wanted)
    if len(taken) != len(wanted):
        raise ValueError("Duplicate card in stacked deck")
    rest = [idx for idx in range(DECK_SIZE) if idx not in taken]
    return Deck(tuple(rest + wanted[::-1]))


def deal(deck: Deck, count: int) -> Tuple[List[Card], Deck]:
    return deck.draw(count)


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank_char, suit_char = label[0].upper(), label[1].lower()
    if rank_char not in RANKS:
        raise ValueError(f"Invalid rank: {label[0]}")
    return Card(RANKS.index(rank_char) + 1, suit_char)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
