from __future__ import annotations

import functools
import itertools
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from .cards import ACE, Card, high_value
from .errors import CategoryMismatchError

HAND_SIZE = 5


class CategoryKind(IntEnum):
    """Hand categories, best first. A lower value is a stronger hand."""

    ROYAL_FLUSH = 1
    STRAIGHT_FLUSH = 2
    FOUR_OF_A_KIND = 3
    FULL_HOUSE = 4
    FLUSH = 5
    STRAIGHT = 6
    THREE_OF_A_KIND = 7
    TWO_PAIR = 8
    ONE_PAIR = 9
    HIGH_CARD = 10


@dataclass(frozen=True)
class HandCategory:
    """A category plus the ranks that break ties inside it.

    ``ranks`` per kind:
      STRAIGHT_FLUSH, STRAIGHT: (straight high card,) with 5 for the wheel
      FOUR_OF_A_KIND, THREE_OF_A_KIND, ONE_PAIR: (repeated rank,)
      FULL_HOUSE: (triple rank, pair rank)
      TWO_PAIR: (higher pair rank, lower pair rank)
      HIGH_CARD: (top card rank,)
      ROYAL_FLUSH, FLUSH: ()
    Ranks use the card encoding (ace is 1).
    """

    kind: CategoryKind
    ranks: Tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return self.kind.name.lower()


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Hand:
    """Exactly five cards kept sorted ascending (ace last).

    Ordering between hands is showdown strength, see ``compare``.
    """

    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        if len(self.cards) != HAND_SIZE:
            raise ValueError(f"A hand needs exactly {HAND_SIZE} cards, got {len(self.cards)}")
        object.__setattr__(self, "cards", tuple(sorted(self.cards)))

    @functools.cached_property
    def category(self) -> HandCategory:
        return classify(self)

    @property
    def ranks(self) -> List[int]:
        return [card.rank for card in self.cards]

    @property
    def labels(self) -> List[str]:
        return [card.label for card in self.cards]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return compare(self, other) < 0

    def __hash__(self) -> int:
        return hash((self.category.kind, tuple(sorted(high_value(r) for r in self.ranks))))

    def __repr__(self) -> str:
        return f"Hand({' '.join(self.labels)})"


def _straight_high(ranks: Sequence[int]) -> Optional[int]:
    # Ace sorts last. The two straights that contain it are matched by shape.
    if list(ranks) == [2, 3, 4, 5, ACE]:
        return 5
    if list(ranks) == [10, 11, 12, 13, ACE]:
        return ACE
    if all(ranks[i] == ranks[i - 1] + 1 for i in range(1, HAND_SIZE)):
        return ranks[-1]
    return None


def classify(hand: Hand) -> HandCategory:
    """Place five sorted cards in exactly one category. First match wins."""
    cards = hand.cards
    r = [card.rank for card in cards]

    is_flush = all(card.suit == cards[0].suit for card in cards)
    straight_high = _straight_high(r)

    if straight_high is not None and is_flush:
        if straight_high == ACE:
            return HandCategory(CategoryKind.ROYAL_FLUSH)
        return HandCategory(CategoryKind.STRAIGHT_FLUSH, (straight_high,))

    for i in range(3, HAND_SIZE):
        if r[i] == r[i - 3]:
            return HandCategory(CategoryKind.FOUR_OF_A_KIND, (r[i],))

    if r[0] == r[1] == r[2] and r[3] == r[4]:
        return HandCategory(CategoryKind.FULL_HOUSE, (r[0], r[3]))
    if r[0] == r[1] and r[2] == r[3] == r[4]:
        return HandCategory(CategoryKind.FULL_HOUSE, (r[2], r[0]))

    if is_flush:
        return HandCategory(CategoryKind.FLUSH)
    if straight_high is not None:
        return HandCategory(CategoryKind.STRAIGHT, (straight_high,))

    for i in range(2, HAND_SIZE):
        if r[i] == r[i - 1] == r[i - 2]:
            return HandCategory(CategoryKind.THREE_OF_A_KIND, (r[i],))

    # Trips are ruled out above, so adjacent equal ranks are always pairs.
    pairs: List[int] = []
    i = HAND_SIZE - 1
    while i > 0:
        if r[i] == r[i - 1]:
            pairs.append(r[i])
            i -= 2
        else:
            i -= 1

    if len(pairs) == 2:
        return HandCategory(CategoryKind.TWO_PAIR, (pairs[0], pairs[1]))
    if len(pairs) == 1:
        return HandCategory(CategoryKind.ONE_PAIR, (pairs[0],))
    return HandCategory(CategoryKind.HIGH_CARD, (r[-1],))


def _cmp(left: Sequence[int], right: Sequence[int]) -> int:
    left, right = list(left), list(right)
    return (left > right) - (left < right)


def _kickers(hand: Hand, *exclude: int) -> List[int]:
    return sorted((card.value for card in hand.cards if card.rank not in exclude), reverse=True)


def _tie_break(a: Hand, b: Hand) -> int:
    ca, cb = a.category, b.category
    if ca.kind != cb.kind:
        raise CategoryMismatchError(f"Cannot tie-break {ca.name} against {cb.name}")
    kind = ca.kind

    if kind == CategoryKind.ROYAL_FLUSH:
        return 0
    if kind in (CategoryKind.STRAIGHT_FLUSH, CategoryKind.STRAIGHT):
        # Wheel reports 5 and broadway reports ace, which counts as 14 here.
        return _cmp([high_value(ca.ranks[0])], [high_value(cb.ranks[0])])
    if kind in (CategoryKind.FOUR_OF_A_KIND, CategoryKind.THREE_OF_A_KIND, CategoryKind.ONE_PAIR):
        rank_a, rank_b = ca.ranks[0], cb.ranks[0]
        return _cmp(
            [high_value(rank_a)] + _kickers(a, rank_a),
            [high_value(rank_b)] + _kickers(b, rank_b),
        )
    if kind == CategoryKind.FULL_HOUSE:
        return _cmp([high_value(r) for r in ca.ranks], [high_value(r) for r in cb.ranks])
    if kind == CategoryKind.TWO_PAIR:
        return _cmp(
            [high_value(r) for r in ca.ranks] + _kickers(a, *ca.ranks),
            [high_value(r) for r in cb.ranks] + _kickers(b, *cb.ranks),
        )
    # FLUSH and HIGH_CARD: every card, high to low.
    return _cmp(_kickers(a), _kickers(b))


def compare(a: Hand, b: Hand) -> int:
    """Return -1, 0 or 1 as ``a`` is weaker than, equal to or stronger than ``b``."""
    kind_a, kind_b = a.category.kind, b.category.kind
    if kind_a != kind_b:
        return 1 if kind_a < kind_b else -1
    return _tie_break(a, b)


def all_hands(hole: Sequence[Card], community: Sequence[Card]) -> List[Hand]:
    cards = list(hole) + list(community)
    if len(cards) < HAND_SIZE:
        raise ValueError(f"Need at least {HAND_SIZE} cards to form a hand, got {len(cards)}")
    return [Hand(tuple(combo)) for combo in itertools.combinations(cards, HAND_SIZE)]


def best_hand(hole: Sequence[Card], community: Sequence[Card]) -> Hand:
    """Strongest five-card hand from hole plus community cards."""
    return max(all_hands(hole, community), key=functools.cmp_to_key(compare))


def describe(hand: Hand) -> str:
    return hand.category.name
