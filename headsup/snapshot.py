"""Plain-dict and JSON form of a Game.

Hosts keep the snapshot between actions, so every field must survive the
trip. Cards travel as two-character labels ("Ah", "Td"), the deck as its
remaining card indices.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from .cards import Card, Deck, parse_cards
from .evaluator import Hand
from .game import Game
from .models import BettingRound, GameConfig, HandResult, Player

SNAPSHOT_VERSION = 1


def _labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def _config_to_dict(config: GameConfig) -> Dict[str, Any]:
    return {
        "player_names": list(config.player_names),
        "starting_stacks": list(config.starting_stacks),
        "small_blind": config.small_blind,
        "big_blind": config.big_blind,
        "first_dealer_index": config.first_dealer_index,
        "seed": config.seed,
    }


def _result_to_dict(result: Optional[HandResult]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "hand_number": result.hand_number,
        "winners": list(result.winners),
        "payouts": list(result.payouts),
        "pot": result.pot,
        "board": _labels(result.board),
        "showdown": result.showdown,
        "best_hands": [_labels(hand.cards) if hand else None for hand in result.best_hands],
        "categories": result.categories,
    }


def game_to_dict(game: Game) -> Dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "config": _config_to_dict(game.config),
        "seed": game.seed,
        "hand_number": game.hand_number,
        "deck": list(game.deck.cards),
        "players": [
            {
                "name": player.name,
                "stack": player.stack,
                "hole": _labels(player.hole),
                "bet_size": player.bet_size,
                "folded": player.folded,
            }
            for player in game.players
        ],
        "community": _labels(game.community),
        "dealer_index": game.dealer_index,
        "small_blind_index": game.small_blind_index,
        "betting_round": game.betting_round.value,
        "pot": game.pot,
        "min_raise": game.min_raise,
        "current_player_index": game.current_player_index,
        "last_aggressor": game.last_aggressor,
        "last_result": _result_to_dict(game.last_result),
        "match_over": game.match_over,
    }


def _result_from_dict(data: Optional[Dict[str, Any]]) -> Optional[HandResult]:
    if data is None:
        return None
    return HandResult(
        hand_number=int(data["hand_number"]),
        winners=tuple(data["winners"]),
        payouts=tuple(data["payouts"]),
        pot=int(data["pot"]),
        board=tuple(parse_cards(data["board"])),
        showdown=bool(data["showdown"]),
        best_hands=tuple(Hand(tuple(parse_cards(labels))) if labels else None for labels in data["best_hands"]),
    )


def game_from_dict(data: Dict[str, Any]) -> Game:
    try:
        if data["version"] != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {data['version']}")
        cfg = data["config"]
        config = GameConfig(
            player_names=tuple(cfg["player_names"]),
            starting_stacks=tuple(cfg["starting_stacks"]),
            small_blind=cfg["small_blind"],
            big_blind=cfg["big_blind"],
            first_dealer_index=cfg["first_dealer_index"],
            seed=cfg["seed"],
        )
        players = tuple(
            Player(
                name=entry["name"],
                stack=entry["stack"],
                hole=tuple(parse_cards(entry["hole"])),
                bet_size=entry["bet_size"],
                folded=entry["folded"],
            )
            for entry in data["players"]
        )
        return Game(
            config=config,
            seed=data["seed"],
            hand_number=data["hand_number"],
            deck=Deck(tuple(data["deck"])),
            players=players,
            community=tuple(parse_cards(data["community"])),
            dealer_index=data["dealer_index"],
            small_blind_index=data["small_blind_index"],
            betting_round=BettingRound(data["betting_round"]),
            pot=data["pot"],
            min_raise=data["min_raise"],
            current_player_index=data["current_player_index"],
            last_aggressor=data["last_aggressor"],
            last_result=_result_from_dict(data["last_result"]),
            match_over=data["match_over"],
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid snapshot: {exc}") from exc


def dumps(game: Game) -> str:
    return json.dumps(game_to_dict(game))


def loads(raw: str) -> Game:
    return game_from_dict(json.loads(raw))
