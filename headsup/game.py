from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Deck, build_deck, deal
from .errors import ConfigError, IllegalActionError, InvariantError
from .evaluator import Hand, best_hand, compare
from .models import (
    CARDS_DEALT,
    NUM_PLAYERS,
    Action,
    ActionKind,
    ActionWindow,
    BettingRound,
    GameConfig,
    HandResult,
    Player,
)

LOGGER = logging.getLogger("headsup.game")

# Game is an immutable snapshot. Every transition builds a new Game with
# dataclasses.replace; a rejected action raises before anything is built, so
# the caller's snapshot is never touched.

COMMUNITY_SIZE = 5


def _small_blind_index(dealer_index: int) -> int:
    # Heads-up: the dealer posts the small blind.
    return dealer_index


def _first_to_act(pre_flop: bool, dealer_index: int) -> int:
    if pre_flop:
        return dealer_index
    return (dealer_index + 1) % NUM_PLAYERS


def _hand_seed(seed: int, hand_number: int) -> int:
    return seed * 1_000_003 + hand_number


def _replace_player(players: Sequence[Player], index: int, **changes: object) -> Tuple[Player, ...]:
    updated = list(players)
    updated[index] = replace(updated[index], **changes)
    return tuple(updated)


def validate_config(config: GameConfig) -> None:
    if len(config.player_names) != NUM_PLAYERS or len(config.starting_stacks) != NUM_PLAYERS:
        raise ConfigError("Heads-up play needs exactly two players")
    for name in config.player_names:
        if not name or not name.strip():
            raise ConfigError("Player name required")
    if config.small_blind <= 0 or config.big_blind <= 0:
        raise ConfigError("Blind amounts must be positive")
    if config.small_blind > config.big_blind:
        raise ConfigError("Small blind cannot exceed big blind")
    if config.first_dealer_index not in range(NUM_PLAYERS):
        raise ConfigError(f"Invalid dealer index: {config.first_dealer_index}")
    if any(stack < 0 for stack in config.starting_stacks):
        raise ConfigError("Starting stacks cannot be negative")

    sb_idx = _small_blind_index(config.first_dealer_index)
    bb_idx = (sb_idx + 1) % NUM_PLAYERS
    for idx, blind in ((sb_idx, config.small_blind), (bb_idx, config.big_blind)):
        if config.starting_stacks[idx] < blind:
            raise ConfigError(f"{config.player_names[idx]} doesn't have enough stack for blind amount")


@dataclass(frozen=True)
class Game:
    """One heads-up match, as of a single decision point."""

    config: GameConfig
    seed: int
    hand_number: int
    deck: Deck
    players: Tuple[Player, ...]
    community: Tuple[Card, ...] = ()
    dealer_index: int = 0
    small_blind_index: int = 0
    betting_round: BettingRound = BettingRound.PRE_FLOP
    pot: int = 0
    min_raise: int = 0
    current_player_index: int = 0
    # Seat whose bet/raise the round is waiting on. When turn order comes back
    # to it the round is over.
    last_aggressor: Optional[int] = None
    last_result: Optional[HandResult] = None
    match_over: bool = False

    # Construction ----------------------------------------------------

    @classmethod
    def new(cls, config: GameConfig) -> "Game":
        validate_config(config)
        seed = config.seed
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF
        LOGGER.debug("New game %s vs %s (seed=%s)", config.player_names[0], config.player_names[1], seed)
        return _start_hand(
            config,
            seed=seed,
            hand_number=1,
            dealer_index=config.first_dealer_index,
            stacks=config.starting_stacks,
            last_result=None,
        )

    # Queries ---------------------------------------------------------

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def big_blind_index(self) -> int:
        return (self.small_blind_index + 1) % NUM_PLAYERS

    @property
    def total_chips(self) -> int:
        return self.pot + sum(player.stack + player.bet_size for player in self.players)

    def _previous_player_index(self) -> int:
        return (self.current_player_index - 1) % NUM_PLAYERS

    def _next_player_index(self) -> int:
        idx = self.current_player_index
        while True:
            idx = (idx + 1) % NUM_PLAYERS
            if not self.players[idx].folded:
                return idx

    def _previous_bet(self) -> int:
        return self.players[self._previous_player_index()].bet_size

    def possible_actions(self) -> List[ActionKind]:
        if self.match_over:
            return []
        if self.last_aggressor is not None and self.last_aggressor == self.current_player_index:
            # Action is back on the aggressor; the round is already over.
            return []

        player = self.current_player
        opponent = self.players[self._previous_player_index()]
        previous_bet = opponent.bet_size
        can_aggress = player.stack > 0 and opponent.stack > 0

        legal: List[ActionKind] = []
        if previous_bet > player.bet_size:
            legal.append(ActionKind.CALL)
            if previous_bet - player.bet_size < player.stack and opponent.stack > 0:
                legal.append(ActionKind.RAISE)
        elif previous_bet == player.bet_size:
            if player.bet_size == 0:
                if can_aggress:
                    legal.append(ActionKind.BET)
            elif can_aggress:
                # Pre-flop after the small blind completes: big blind has the option.
                legal.append(ActionKind.RAISE)
            legal.append(ActionKind.CHECK)
        legal.append(ActionKind.FOLD)
        return legal

    def call_amount(self) -> Optional[int]:
        if ActionKind.CALL not in self.possible_actions():
            return None
        player = self.current_player
        return min(player.stack, self._previous_bet() - player.bet_size)

    def raise_or_bet_range(self) -> Optional[Tuple[int, int]]:
        legal = self.possible_actions()
        if ActionKind.BET not in legal and ActionKind.RAISE not in legal:
            return None
        player = self.current_player
        max_amount = player.bet_size + player.stack - self._previous_bet()
        return min(max_amount, self.min_raise), max_amount

    def action_window(self) -> ActionWindow:
        legal = self.possible_actions()
        bounds = self.raise_or_bet_range()
        return ActionWindow(
            seat=self.current_player_index if legal else None,
            legal=legal,
            call_amount=self.call_amount(),
            min_amount=bounds[0] if bounds else None,
            max_amount=bounds[1] if bounds else None,
        )

    # Actions ---------------------------------------------------------

    def act(self, action: Action) -> "Game":
        if not isinstance(action, Action) or not isinstance(action.kind, ActionKind):
            raise IllegalActionError(f"Unsupported action {action!r}")
        if self.match_over:
            raise IllegalActionError("Match is over")

        LOGGER.debug(
            "Hand %d %s: %s %s%s",
            self.hand_number,
            self.betting_round.value,
            self.current_player.name,
            action.kind.value,
            f" {action.amount}" if action.amount is not None else "",
        )

        if action.kind == ActionKind.FOLD:
            return self._fold()
        if action.kind == ActionKind.CHECK:
            return self._check()
        if action.kind == ActionKind.CALL:
            return self._call()
        return self._bet_or_raise(action.kind, action.amount)

    def _check(self) -> "Game":
        if ActionKind.CHECK not in self.possible_actions():
            raise IllegalActionError("Cannot check when facing a bet")
        return self._advance_turn()

    def _call(self) -> "Game":
        amount = self.call_amount()
        if amount is None:
            raise IllegalActionError("Nothing to call")
        player = self.current_player
        players = _replace_player(
            self.players,
            self.current_player_index,
            stack=player.stack - amount,
            bet_size=player.bet_size + amount,
        )
        return replace(self, players=players)._advance_turn()

    def _bet_or_raise(self, kind: ActionKind, amount: Optional[int]) -> "Game":
        verb = "bet" if kind == ActionKind.BET else "raise"
        if kind not in self.possible_actions():
            raise IllegalActionError(f"Player can't {verb} at this point")
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise IllegalActionError(f"A {verb} requires an amount")
        bounds = self.raise_or_bet_range()
        if bounds is None or not bounds[0] <= amount <= bounds[1]:
            raise IllegalActionError(f"{amount} is an illegal {verb} amount")

        player = self.current_player
        new_bet = self._previous_bet() + amount
        players = _replace_player(
            self.players,
            self.current_player_index,
            stack=player.stack - (new_bet - player.bet_size),
            bet_size=new_bet,
        )
        game = replace(
            self,
            players=players,
            min_raise=amount,
            last_aggressor=self.current_player_index,
        )
        return game._advance_turn()

    def _fold(self) -> "Game":
        players = _replace_player(self.players, self.current_player_index, folded=True)
        game = replace(self, players=players)
        remaining = [idx for idx, player in enumerate(players) if not player.folded]
        if len(remaining) == 1:
            pot = game.pot + sum(player.bet_size for player in players)
            players = tuple(replace(player, bet_size=0) for player in players)
            return replace(game, players=players, pot=pot)._award(remaining, showdown=False)
        return game._advance_turn()

    # Round flow ------------------------------------------------------

    def _advance_turn(self) -> "Game":
        acted = self.current_player_index
        game = replace(self, current_player_index=self._next_player_index())
        if game._betting_settled():
            return game._close_round()
        if game.last_aggressor is None:
            # Nobody has bet yet: the player who just checked/called closes the
            # round if action gets back to them.
            return replace(game, last_aggressor=acted)
        if game.last_aggressor == game.current_player_index:
            return game._close_round()
        return game

    def _live_players(self) -> List[Player]:
        return [player for player in self.players if not player.folded]

    def _betting_settled(self) -> bool:
        """True once someone is all-in and nobody can still put chips in."""
        live = self._live_players()
        if not any(player.stack == 0 for player in live):
            return False
        top = max(player.bet_size for player in live)
        return all(player.bet_size == top or player.stack == 0 for player in live)

    def _needs_runout(self) -> bool:
        return any(player.stack == 0 for player in self._live_players())

    def _collect_bets(self) -> "Game":
        bets = sorted((player.bet_size for player in self.players), reverse=True)
        uncalled = bets[0] - bets[1]
        players = list(self.players)
        if uncalled > 0:
            top = max(range(NUM_PLAYERS), key=lambda idx: players[idx].bet_size)
            LOGGER.debug("Returning %d uncalled to %s", uncalled, players[top].name)
            players[top] = replace(players[top], stack=players[top].stack + uncalled, bet_size=players[top].bet_size - uncalled)
        pot = self.pot + sum(player.bet_size for player in players)
        players = [replace(player, bet_size=0) for player in players]
        return replace(self, players=tuple(players), pot=pot)

    def _close_round(self) -> "Game":
        game = self._collect_bets()
        if game.betting_round == BettingRound.RIVER:
            return game._showdown()

        next_round = game.betting_round.next()
        cards, deck = deal(game.deck, CARDS_DEALT[next_round])
        game = replace(
            game,
            deck=deck,
            community=game.community + tuple(cards),
            betting_round=next_round,
            min_raise=game.config.big_blind,
            current_player_index=_first_to_act(False, game.dealer_index),
            last_aggressor=None,
        )
        LOGGER.debug("Hand %d %s: %s", game.hand_number, next_round.value, " ".join(card.label for card in cards))
        if game._needs_runout():
            # No more betting possible; keep dealing to showdown.
            return game._close_round()
        return game

    def _showdown(self) -> "Game":
        if len(self.community) != COMMUNITY_SIZE:
            raise InvariantError(f"Community not full ({len(self.community)}/{COMMUNITY_SIZE})")
        hands: List[Optional[Hand]] = [
            None if player.folded else best_hand(player.hole, self.community) for player in self.players
        ]
        contenders = [idx for idx, hand in enumerate(hands) if hand is not None]
        top = max((hands[idx] for idx in contenders), key=functools.cmp_to_key(compare))
        winners = [idx for idx in contenders if compare(hands[idx], top) == 0]
        return self._award(winners, showdown=True, best_hands=tuple(hands))

    def _award(
        self,
        winners: Sequence[int],
        showdown: bool,
        best_hands: Tuple[Optional[Hand], ...] = (),
    ) -> "Game":
        share, remainder = divmod(self.pot, len(winners))
        # Odd chips go to the winner closest to the dealer's left.
        ordered = sorted(winners, key=lambda idx: (idx - self.dealer_index - 1) % NUM_PLAYERS)
        payouts = [0] * NUM_PLAYERS
        for position, idx in enumerate(ordered):
            payouts[idx] = share + (1 if position < remainder else 0)

        players = tuple(
            replace(player, stack=player.stack + payouts[idx], bet_size=0) for idx, player in enumerate(self.players)
        )
        result = HandResult(
            hand_number=self.hand_number,
            winners=tuple(sorted(winners)),
            payouts=tuple(payouts),
            pot=self.pot,
            board=self.community,
            showdown=showdown,
            best_hands=best_hands,
        )
        winning_hand = best_hands[ordered[0]] if best_hands else None
        LOGGER.info(
            "Hand %d: %s win %d%s",
            self.hand_number,
            ", ".join(players[idx].name for idx in result.winners),
            self.pot,
            f" with {winning_hand.category.name}" if winning_hand else "",
        )
        return _start_hand(
            self.config,
            seed=self.seed,
            hand_number=self.hand_number + 1,
            dealer_index=(self.dealer_index + 1) % NUM_PLAYERS,
            stacks=[player.stack for player in players],
            last_result=result,
        )


def _start_hand(
    config: GameConfig,
    seed: int,
    hand_number: int,
    dealer_index: int,
    stacks: Sequence[int],
    last_result: Optional[HandResult],
) -> Game:
    players = [Player(name=name, stack=stack) for name, stack in zip(config.player_names, stacks)]
    small_blind_index = _small_blind_index(dealer_index)

    if any(player.stack == 0 for player in players):
        winner = next(player for player in players if player.stack > 0)
        LOGGER.info("Match over after %d hands: %s wins", hand_number - 1, winner.name)
        return Game(
            config=config,
            seed=seed,
            hand_number=hand_number,
            deck=Deck(()),
            players=tuple(players),
            dealer_index=dealer_index,
            small_blind_index=small_blind_index,
            min_raise=config.big_blind,
            current_player_index=_first_to_act(True, dealer_index),
            last_result=last_result,
            match_over=True,
        )

    deck = build_deck(_hand_seed(seed, hand_number))
    for idx in range(NUM_PLAYERS):
        hole, deck = deal(deck, 2)
        players[idx] = replace(players[idx], hole=tuple(hole))

    # A short stack on a rolled-over hand posts whatever it has left.
    big_blind_index = (small_blind_index + 1) % NUM_PLAYERS
    for idx, blind in ((small_blind_index, config.small_blind), (big_blind_index, config.big_blind)):
        posted = min(players[idx].stack, blind)
        players[idx] = replace(players[idx], stack=players[idx].stack - posted, bet_size=posted)

    game = Game(
        config=config,
        seed=seed,
        hand_number=hand_number,
        deck=deck,
        players=tuple(players),
        dealer_index=dealer_index,
        small_blind_index=small_blind_index,
        betting_round=BettingRound.PRE_FLOP,
        pot=0,
        min_raise=config.big_blind,
        current_player_index=_first_to_act(True, dealer_index),
        last_aggressor=None,
        last_result=last_result,
    )
    if game._betting_settled():
        return game._close_round()
    return game


# Functional surface used by hosts ---------------------------------------


def new_game(config: GameConfig) -> Game:
    return Game.new(config)


def possible_actions(game: Game) -> List[ActionKind]:
    return game.possible_actions()


def call_amount(game: Game) -> Optional[int]:
    return game.call_amount()


def raise_or_bet_range(game: Game) -> Optional[Tuple[int, int]]:
    return game.raise_or_bet_range()


def action_window(game: Game) -> ActionWindow:
    return game.action_window()


def apply(game: Game, action: Action) -> Game:
    return game.act(action)
