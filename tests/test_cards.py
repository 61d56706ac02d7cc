import pytest

from headsup.cards import ACE, Card, Deck, Suit, build_deck, deal, parse_cards, parse_label, stacked_deck
from headsup.errors import DeckExhaustedError, InvariantError


def test_ace_sorts_above_every_other_rank():
    cards = parse_cards(["Ah", "Kd", "2c", "Ts"])
    assert [card.label for card in sorted(cards)] == ["2c", "Ts", "Kd", "Ah"]
    assert Card(ACE, Suit.SPADE) > Card(13, Suit.SPADE)


def test_card_equality_ignores_suit():
    spade, heart = Card(ACE, "s"), Card(ACE, "h")
    assert spade == heart
    assert hash(spade) == hash(heart)
    assert not spade.same_card(heart)
    assert spade.same_card(Card(1, Suit.SPADE))


def test_card_index_round_trips_for_whole_deck():
    cards = [Card.from_index(idx) for idx in range(52)]
    assert [card.index for card in cards] == list(range(52))
    assert len({card.label for card in cards}) == 52


def test_card_validation_rejects_invalid_values():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card("1", "h")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Invalid rank"):
        Card(14, "h")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card(1, "x")  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_label("10h")
    with pytest.raises(ValueError, match="Invalid rank"):
        parse_label("Zh")


def test_build_deck_is_a_seeded_permutation():
    deck = build_deck(seed=7)
    assert len(deck) == 52
    assert sorted(deck.cards) == list(range(52))
    assert build_deck(seed=7) == deck
    assert build_deck(seed=8) != deck


def test_deal_draws_from_the_end_without_touching_the_source():
    deck = Deck((0, 1, 2))
    cards, rest = deal(deck, 1)
    assert cards[0].label == "Ad"
    assert rest.cards == (0, 1)
    assert deck.cards == (0, 1, 2)


def test_deal_raises_when_deck_exhausted():
    _, rest = deal(Deck((0, 1)), 2)
    with pytest.raises(DeckExhaustedError, match="Not enough cards"):
        deal(rest, 1)
    assert issubclass(DeckExhaustedError, InvariantError)
    assert issubclass(DeckExhaustedError, RuntimeError)


def test_stacked_deck_deals_requested_cards_first():
    top = parse_cards(["Ah", "Kd", "2c"])
    deck = stacked_deck(top)
    assert len(deck) == 52
    drawn, _ = deal(deck, 3)
    assert [card.label for card in drawn] == ["Ah", "Kd", "2c"]
    with pytest.raises(ValueError, match="Duplicate"):
        stacked_deck(parse_cards(["Ah", "Ah"]))
