from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .cards import Card
from .evaluator import Hand

NUM_PLAYERS = 2


class BettingRound(str, Enum):
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"

    def next(self) -> "BettingRound":
        """Following round; the river wraps back to pre-flop of the next hand."""
        order = list(BettingRound)
        return order[(order.index(self) + 1) % len(order)]


# Community cards dealt when entering a round.
CARDS_DEALT = {
    BettingRound.FLOP: 3,
    BettingRound.TURN: 1,
    BettingRound.RIVER: 1,
}


class ActionKind(str, Enum):
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"
    CHECK = "CHECK"
    FOLD = "FOLD"


@dataclass(frozen=True)
class Action:
    """A move for the player to act.

    BET carries the new bet size. RAISE carries the increment over the
    opponent's bet. The other kinds take no amount.
    """

    kind: ActionKind
    amount: Optional[int] = None

    @classmethod
    def call(cls) -> "Action":
        return cls(ActionKind.CALL)

    @classmethod
    def check(cls) -> "Action":
        return cls(ActionKind.CHECK)

    @classmethod
    def fold(cls) -> "Action":
        return cls(ActionKind.FOLD)

    @classmethod
    def bet(cls, amount: int) -> "Action":
        return cls(ActionKind.BET, amount)

    @classmethod
    def raise_by(cls, amount: int) -> "Action":
        return cls(ActionKind.RAISE, amount)


@dataclass(frozen=True)
class ActionWindow:
    seat: Optional[int]
    legal: List[ActionKind]
    call_amount: Optional[int]
    min_amount: Optional[int]
    max_amount: Optional[int]


@dataclass(frozen=True)
class GameConfig:
    player_names: Tuple[str, str] = ("Player 1", "Player 2")
    starting_stacks: Tuple[int, int] = (1_000, 1_000)
    small_blind: int = 5
    big_blind: int = 10
    first_dealer_index: int = 0
    seed: Optional[int] = None


@dataclass(frozen=True)
class Player:
    name: str
    stack: int
    hole: Tuple[Card, ...] = ()
    bet_size: int = 0
    folded: bool = False

    @property
    def all_in(self) -> bool:
        return self.stack == 0 and not self.folded


@dataclass(frozen=True)
class HandResult:
    """How a finished hand was settled."""

    hand_number: int
    winners: Tuple[int, ...]
    payouts: Tuple[int, ...]
    pot: int
    board: Tuple[Card, ...]
    showdown: bool
    best_hands: Tuple[Optional[Hand], ...] = ()

    @property
    def categories(self) -> List[Optional[str]]:
        return [hand.category.name if hand else None for hand in self.best_hands]
