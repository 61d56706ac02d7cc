from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from headsup.cards import parse_cards, stacked_deck
from headsup.game import Game, new_game
from headsup.models import Action, GameConfig
from practice.bots import passive_strategy


def make_config(
    *,
    starting_stacks: Tuple[int, int] = (1_000, 1_000),
    sb: int = 5,
    bb: int = 10,
    dealer: int = 0,
    seed: int = 42,
    names: Tuple[str, str] = ("Alpha", "Beta"),
) -> GameConfig:
    return GameConfig(
        player_names=names,
        starting_stacks=starting_stacks,
        small_blind=sb,
        big_blind=bb,
        first_dealer_index=dealer,
        seed=seed,
    )


def create_game(**kwargs) -> Game:
    """Fresh game with blinds posted and hole cards dealt."""
    return new_game(make_config(**kwargs))


def stack_deck(monkeypatch, labels: Sequence[str]) -> None:
    """Force every hand to deal ``labels`` first: seat 0 hole, seat 1 hole, then the board."""
    deck = stacked_deck(parse_cards(labels))
    monkeypatch.setattr("headsup.game.build_deck", lambda seed=None: deck)


def perform_actions(game: Game, actions: Iterable[Action]) -> Game:
    """Apply a scripted sequence of actions for whoever is to act."""
    for action in actions:
        game = game.act(action)
    return game


def check_down(game: Game) -> Game:
    """Check or call until the current hand is finished."""
    hand_number = game.hand_number
    while game.hand_number == hand_number and not game.match_over:
        game = game.act(passive_strategy(game))
    return game
