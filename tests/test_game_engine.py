from headsup.game import (
    action_window,
    apply,
    call_amount,
    possible_actions,
    raise_or_bet_range,
)
from headsup.models import Action, ActionKind, BettingRound

from .helpers import check_down, create_game, perform_actions, stack_deck


def test_new_game_posts_blinds_and_deals_hole_cards():
    game = create_game()
    dealer, big_blind = game.players
    assert game.dealer_index == 0
    assert game.small_blind_index == 0
    assert (dealer.stack, dealer.bet_size) == (995, 5)
    assert (big_blind.stack, big_blind.bet_size) == (990, 10)
    assert all(len(player.hole) == 2 for player in game.players)
    assert len(game.deck) == 48
    assert game.community == ()
    assert game.betting_round == BettingRound.PRE_FLOP
    assert game.pot == 0
    assert game.min_raise == 10
    assert game.last_aggressor is None
    assert game.hand_number == 1


def test_heads_up_dealer_posts_small_blind_and_acts_first():
    game = create_game(dealer=1)
    assert game.small_blind_index == 1
    assert game.players[1].bet_size == 5
    assert game.players[0].bet_size == 10
    assert game.current_player_index == 1


def test_dealer_opening_options():
    game = create_game()
    assert possible_actions(game) == [ActionKind.CALL, ActionKind.RAISE, ActionKind.FOLD]
    assert call_amount(game) == 5
    assert raise_or_bet_range(game) == (10, 990)


def test_big_blind_gets_option_after_dealer_completes():
    game = create_game().act(Action.call())
    assert game.current_player_index == 1
    assert game.last_aggressor == 0
    assert possible_actions(game) == [ActionKind.RAISE, ActionKind.CHECK, ActionKind.FOLD]
    assert call_amount(game) is None
    assert raise_or_bet_range(game) == (10, 990)


def test_call_then_check_moves_to_flop():
    game = create_game()
    game = game.act(Action.call())
    game = game.act(Action.check())

    assert game.betting_round == BettingRound.FLOP
    assert game.pot == 20
    assert len(game.community) == 3
    assert len(game.deck) == 45
    assert [player.bet_size for player in game.players] == [0, 0]
    assert [player.stack for player in game.players] == [990, 990]
    assert game.current_player_index == 1
    assert game.last_aggressor is None
    assert game.min_raise == 10


def test_round_ending_check_exposes_next_round_actions():
    game = perform_actions(create_game(), [Action.call(), Action.check()])
    assert possible_actions(game) == [ActionKind.BET, ActionKind.CHECK, ActionKind.FOLD]
    assert call_amount(game) is None
    assert raise_or_bet_range(game) == (10, 990)


def test_check_check_deals_turn_then_river():
    game = perform_actions(create_game(), [Action.call(), Action.check()])
    game = perform_actions(game, [Action.check(), Action.check()])
    assert game.betting_round == BettingRound.TURN
    assert len(game.community) == 4
    assert game.current_player_index == 1

    game = perform_actions(game, [Action.check(), Action.check()])
    assert game.betting_round == BettingRound.RIVER
    assert len(game.community) == 5
    assert game.pot == 20


def test_bet_then_call_closes_round():
    game = perform_actions(create_game(), [Action.call(), Action.check()])
    game = game.act(Action.bet(20))
    assert game.players[1].bet_size == 20
    assert game.players[1].stack == 970
    assert game.last_aggressor == 1
    assert game.min_raise == 20
    assert game.current_player_index == 0
    assert possible_actions(game) == [ActionKind.CALL, ActionKind.RAISE, ActionKind.FOLD]
    assert call_amount(game) == 20
    assert raise_or_bet_range(game) == (20, 970)

    game = game.act(Action.call())
    assert game.betting_round == BettingRound.TURN
    assert game.pot == 60
    assert [player.stack for player in game.players] == [970, 970]


def test_raise_reopens_action_for_the_bettor():
    game = perform_actions(create_game(), [Action.call(), Action.check(), Action.bet(20)])
    game = game.act(Action.raise_by(40))

    raiser = game.players[0]
    assert raiser.bet_size == 60
    assert raiser.stack == 930
    assert game.min_raise == 40
    assert game.last_aggressor == 0
    assert game.current_player_index == 1
    assert call_amount(game) == 40
    assert raise_or_bet_range(game) == (40, 930)

    game = game.act(Action.call())
    assert game.betting_round == BettingRound.TURN
    assert game.pot == 140


def test_stack_plus_bet_is_conserved_across_own_action():
    game = create_game()
    before = game.players[0].stack + game.players[0].bet_size
    after_game = game.act(Action.raise_by(25))
    after = after_game.players[0].stack + after_game.players[0].bet_size
    assert before == after
    assert after_game.players[0].bet_size == 35


def test_fold_preflop_awards_blinds_and_starts_next_hand():
    game = create_game()
    game = game.act(Action.fold())

    result = game.last_result
    assert result is not None
    assert result.hand_number == 1
    assert result.winners == (1,)
    assert result.payouts == (0, 15)
    assert result.pot == 15
    assert result.showdown is False

    assert game.hand_number == 2
    assert game.dealer_index == 1
    assert game.current_player_index == 1
    # Dealer moved to seat 1, which now posts the small blind.
    assert (game.players[1].stack, game.players[1].bet_size) == (1000, 5)
    assert (game.players[0].stack, game.players[0].bet_size) == (985, 10)
    assert not any(player.folded for player in game.players)


def test_fold_on_river_awards_whole_pot():
    game = perform_actions(
        create_game(),
        [
            Action.call(),
            Action.check(),
            Action.bet(20),
            Action.call(),
            Action.check(),
            Action.check(),
            Action.bet(50),
        ],
    )
    assert game.betting_round == BettingRound.RIVER
    game = game.act(Action.fold())

    result = game.last_result
    assert result.winners == (1,)
    assert result.pot == 110
    assert result.payouts == (0, 110)
    assert len(result.board) == 5
    assert game.players[1].stack + game.players[1].bet_size == 1030
    assert game.players[0].stack + game.players[0].bet_size == 970


def test_fold_is_legal_even_when_check_is_available():
    game = perform_actions(create_game(), [Action.call(), Action.check()])
    assert ActionKind.FOLD in possible_actions(game)
    game = game.act(Action.fold())
    assert game.last_result.winners == (0,)
    assert game.last_result.pot == 20


def test_showdown_pays_best_hand(monkeypatch):
    stack_deck(monkeypatch, ["Ah", "Ad", "Kh", "Kd", "2c", "7s", "9d", "Jc", "3h"])
    game = check_down(create_game())

    result = game.last_result
    assert result.showdown is True
    assert result.winners == (0,)
    assert result.payouts == (20, 0)
    assert [card.label for card in result.board] == ["2c", "7s", "9d", "Jc", "3h"]
    assert result.categories == ["one_pair", "one_pair"]
    assert game.players[0].stack + game.players[0].bet_size == 1010
    assert game.players[1].stack + game.players[1].bet_size == 990


def test_showdown_splits_tied_pot(monkeypatch):
    stack_deck(monkeypatch, ["2h", "3d", "2s", "3c", "Ah", "Kd", "Qc", "Js", "Th"])
    game = check_down(create_game())

    result = game.last_result
    assert result.winners == (0, 1)
    assert result.payouts == (10, 10)
    assert result.categories == ["straight", "straight"]
    assert [player.stack + player.bet_size for player in game.players] == [1000, 1000]


def test_action_window_bundles_queries():
    game = create_game()
    window = action_window(game)
    assert window.seat == 0
    assert window.legal == [ActionKind.CALL, ActionKind.RAISE, ActionKind.FOLD]
    assert window.call_amount == 5
    assert (window.min_amount, window.max_amount) == (10, 990)


def test_apply_matches_method_and_leaves_input_unchanged():
    game = create_game()
    via_function = apply(game, Action.call())
    via_method = game.act(Action.call())
    assert via_function == via_method
    assert game.players[0].bet_size == 5
    assert game.current_player_index == 0
