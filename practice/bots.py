from __future__ import annotations

import random
from typing import Optional, Sequence

from headsup.cards import Card
from headsup.game import Game
from headsup.models import Action, ActionKind, BettingRound


def _rough_hand_strength(hole: Sequence[Card]) -> int:
    """Very rough proxy for hand quality used to drive aggression choices."""
    if len(hole) < 2:
        return 0

    values = [card.value for card in hole]
    score = sum(values)
    if values[0] == values[1]:
        score += 14  # pairs are quite strong pre-flop
    else:
        gap = abs(values[0] - values[1])
        if gap == 1:
            score += 4
        elif gap == 2:
            score += 2
    if hole[0].suit == hole[1].suit:
        score += 3
    if min(values) >= 11:
        score += 2

    return score


def _should_raise(strength: int, betting_round: BettingRound, facing_bet: bool, rng: random.Random) -> bool:
    base = 0.2 if facing_bet else 0.35
    round_bonus = {
        BettingRound.PRE_FLOP: 0.0,
        BettingRound.FLOP: 0.05,
        BettingRound.TURN: 0.1,
        BettingRound.RIVER: 0.12,
    }[betting_round]
    scaled_strength = min(strength / 45.0, 0.45)
    probability = min(0.85, base + round_bonus + scaled_strength)

    # Always attack with premium holdings.
    if strength >= 36:
        return True
    return rng.random() < probability


def _choose_amount(min_amount: int, max_amount: int, facing_bet: bool, rng: random.Random) -> int:
    if max_amount <= min_amount:
        return min_amount

    span = max_amount - min_amount
    roll = rng.random()

    # Facing a bet → weight toward stronger responses, otherwise mix in more probes.
    if facing_bet:
        if roll < 0.2:
            return min_amount
        if roll > 0.85:
            return max_amount
    else:
        if roll < 0.35:
            return min_amount
        if roll > 0.9:
            return max_amount

    return min_amount + int(span * rng.random())


def passive_strategy(game: Game, rng: Optional[random.Random] = None) -> Action:
    """Never puts in a raise: checks when free, calls otherwise."""
    legal = game.possible_actions()
    if ActionKind.CHECK in legal:
        return Action.check()
    if ActionKind.CALL in legal:
        return Action.call()
    return Action.fold()


def baseline_strategy(game: Game, rng: random.Random) -> Action:
    """Aggressive demo bot: mixes in random bets with a bias toward stronger holdings."""
    window = game.action_window()
    legal = window.legal
    strength = _rough_hand_strength(game.current_player.hole)
    facing_bet = window.call_amount is not None

    aggressive = ActionKind.RAISE if ActionKind.RAISE in legal else ActionKind.BET
    if aggressive in legal and window.min_amount is not None and window.max_amount is not None:
        if _should_raise(strength, game.betting_round, facing_bet, rng):
            amount = _choose_amount(window.min_amount, window.max_amount, facing_bet, rng)
            return Action(aggressive, amount)

    if ActionKind.CALL in legal:
        # Weak holdings give up to large bets now and then.
        if strength < 16 and window.call_amount and window.call_amount > game.config.big_blind * 4:
            if rng.random() < 0.5:
                return Action.fold()
        return Action.call()

    if ActionKind.CHECK in legal:
        return Action.check()

    return Action.fold()
