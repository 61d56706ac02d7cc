"""Play a seeded heads-up match between two practice bots.

Example:
    python -m practice --hands 200 --seed 7 --strategies baseline passive
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from headsup.errors import ConfigError
from headsup.game import Game, new_game
from headsup.models import Action, GameConfig

from .bots import baseline_strategy, passive_strategy

LOGGER = logging.getLogger("practice")

Strategy = Callable[[Game, random.Random], Action]

STRATEGIES: Dict[str, Strategy] = {
    "baseline": baseline_strategy,
    "passive": passive_strategy,
}


def run_match(
    config: GameConfig,
    strategies: Sequence[Strategy],
    max_hands: int,
    rng_seed: int = 0,
) -> Game:
    """Drive a match until one player is out of chips or ``max_hands`` finish."""
    rngs = [random.Random(rng_seed + idx) for idx in range(len(strategies))]
    game = new_game(config)
    total = game.total_chips

    while not game.match_over and game.hand_number <= max_hands:
        actor = game.current_player_index
        action = strategies[actor](game, rngs[actor])
        game = game.act(action)
        if game.total_chips != total:
            raise RuntimeError(f"Chip count drifted: {game.total_chips} != {total}")

    return game


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Heads-up hold'em self-play")
    parser.add_argument("--hands", type=int, default=100, help="max hands to play")
    parser.add_argument("--seed", type=int, default=42, help="deck and bot seed")
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--sb", type=int, default=5)
    parser.add_argument("--bb", type=int, default=10)
    parser.add_argument("--dealer", type=int, choices=(0, 1), default=0, help="seat holding the first button")
    parser.add_argument("--names", nargs=2, default=["Alpha", "Beta"], metavar=("P1", "P2"))
    parser.add_argument(
        "--strategies",
        nargs=2,
        choices=sorted(STRATEGIES),
        default=["baseline", "baseline"],
        metavar=("S1", "S2"),
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = GameConfig(
        player_names=(args.names[0], args.names[1]),
        starting_stacks=(args.starting_stack, args.starting_stack),
        small_blind=args.sb,
        big_blind=args.bb,
        first_dealer_index=args.dealer,
        seed=args.seed,
    )
    try:
        game = run_match(config, [STRATEGIES[name] for name in args.strategies], args.hands, args.seed)
    except ConfigError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2

    played = game.hand_number - 1
    LOGGER.info("Played %d hands%s", played, " (match over)" if game.match_over else "")
    for player in game.players:
        print(f"{player.name}: {player.stack + player.bet_size}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
