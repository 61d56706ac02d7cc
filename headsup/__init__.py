"""Heads-up hold'em rules engine: hand evaluation and the betting state machine."""

from .cards import Card, Deck, RANKS, SUITS, Suit, build_deck, deal, parse_cards, parse_label
from .errors import (
    CategoryMismatchError,
    ConfigError,
    DeckExhaustedError,
    IllegalActionError,
    InvariantError,
    PokerError,
)
from .evaluator import CategoryKind, Hand, HandCategory, best_hand, classify, compare
from .game import (
    Game,
    action_window,
    apply,
    call_amount,
    new_game,
    possible_actions,
    raise_or_bet_range,
)
from .models import Action, ActionKind, ActionWindow, BettingRound, GameConfig, HandResult, Player

__all__ = [
    "Card",
    "Deck",
    "RANKS",
    "SUITS",
    "Suit",
    "build_deck",
    "deal",
    "parse_cards",
    "parse_label",
    "CategoryMismatchError",
    "ConfigError",
    "DeckExhaustedError",
    "IllegalActionError",
    "InvariantError",
    "PokerError",
    "CategoryKind",
    "Hand",
    "HandCategory",
    "best_hand",
    "classify",
    "compare",
    "Game",
    "action_window",
    "apply",
    "call_amount",
    "new_game",
    "possible_actions",
    "raise_or_bet_range",
    "Action",
    "ActionKind",
    "ActionWindow",
    "BettingRound",
    "GameConfig",
    "HandResult",
    "Player",
]
