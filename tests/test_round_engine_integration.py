import pytest

from coinche.bidding import PASS, Bid, Target
from coinche.cards import Card, Rank, Suit, card_sort_key
from coinche.deck import build_deck
from coinche.encode import encode_round
from coinche.errors import (
    CardNotHeld,
    MustFollowSuit,
    MustTrump,
    NotYourTurn,
    RoundAlreadyTerminal,
    RoundNotInBiddingPhase,
    RoundNotInPlayPhase,
)
from coinche.game import RoundPhase, new_round
from coinche.rules_schema import RuleSet
from coinche.scoring import ContractOutcome


def hearts_round():
    """Ordered deck, dealer 0: seat 1 bids 80 hearts and everyone passes."""
    round_ = new_round(0, build_deck())
    round_.submit_bid(1, Bid.contract(Suit.HEARTS, Target.CONTRACT_80))
    for seat in (2, 3, 0):
        round_.submit_bid(seat, PASS)
    return round_


def autoplay(round_):
    while not round_.is_terminal():
        seat = round_.current_player
        round_.submit_play(seat, min(round_.legal_plays(seat), key=card_sort_key))
    return round_


def test_ordered_deck_deals_in_packets():
    round_ = new_round(0, build_deck())

    assert round_.hand(0) == [
        Card(Rank.EIGHT, Suit.DIAMONDS),
        Card(Rank.NINE, Suit.DIAMONDS),
        Card(Rank.JACK, Suit.DIAMONDS),
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.JACK, Suit.HEARTS),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
        Card(Rank.ACE, Suit.SPADES),
    ]
    assert round_.hand(1)[:3] == [Card(Rank.SEVEN, Suit.CLUBS), Card(Rank.EIGHT, Suit.CLUBS), Card(Rank.NINE, Suit.CLUBS)]
    assert round_.phase is RoundPhase.BIDDING
    assert round_.current_player == 1
    assert round_.legal_plays(1) == set()


def test_contract_starts_play_with_leader_left_of_dealer():
    round_ = hearts_round()

    assert round_.phase is RoundPhase.PLAY
    assert round_.contract.bidder == 1
    assert round_.contract.trump is Suit.HEARTS
    assert round_.current_player == 1
    assert round_.legal_bids(2) == set()


def test_first_trick_forces_a_trump():
    round_ = hearts_round()
    round_.submit_play(1, Card(Rank.SEVEN, Suit.CLUBS))
    round_.submit_play(2, Card(Rank.KING, Suit.CLUBS))
    round_.submit_play(3, Card(Rank.TEN, Suit.CLUBS))

    assert round_.legal_plays(0) == {Card(Rank.NINE, Suit.HEARTS), Card(Rank.JACK, Suit.HEARTS)}

    before = encode_round(round_)
    with pytest.raises(MustTrump):
        round_.submit_play(0, Card(Rank.EIGHT, Suit.DIAMONDS))
    assert encode_round(round_) == before

    round_.submit_play(0, Card(Rank.JACK, Suit.HEARTS))

    assert round_.state.tricks[0].winner(Suit.HEARTS) == 0
    assert round_.state.card_points == [34, 0]
    assert round_.state.tricks_won == [1, 0]
    assert len(round_.state.played_cards()) == 4
    assert round_.current_player == 0


def test_follow_suit_and_held_card_errors():
    round_ = hearts_round()
    round_.submit_play(1, Card(Rank.SEVEN, Suit.CLUBS))

    with pytest.raises(MustFollowSuit):
        round_.submit_play(2, Card(Rank.ACE, Suit.HEARTS))
    with pytest.raises(CardNotHeld):
        round_.submit_play(2, Card(Rank.ACE, Suit.CLUBS))
    with pytest.raises(NotYourTurn):
        round_.submit_play(3, Card(Rank.ACE, Suit.CLUBS))
    assert len(round_.hand(2)) == 8


def test_full_round_conserves_points_and_scores_belote():
    round_ = autoplay(hearts_round())

    assert round_.phase is RoundPhase.COMPLETE
    assert round_.current_player is None
    state = round_.state
    assert sum(state.card_points) == 162
    assert sum(state.tricks_won) == 8
    assert state.belote_team == 1
    assert [call for _, call in state.belote_calls] == ["belote", "rebelote"]
    assert state.bonus_points() == [0, 20]
    assert len(state.played_cards()) == 32
    assert state.last_trick().winner(Suit.HEARTS) == state.last_trick_winner == 1

    result = round_.outcome()
    assert result.outcome is ContractOutcome.FAILURE
    assert result.card_points == (97, 65)
    assert result.tricks_won == (5, 3)
    assert result.belote_team == 1
    assert result.scores == (162, 20)


def test_phase_errors():
    round_ = new_round(0, build_deck())

    with pytest.raises(RoundNotInPlayPhase):
        round_.submit_play(1, Card(Rank.SEVEN, Suit.CLUBS))

    round_ = hearts_round()
    with pytest.raises(RoundNotInBiddingPhase):
        round_.submit_bid(1, PASS)

    autoplay(round_)
    with pytest.raises(RoundAlreadyTerminal):
        round_.submit_play(1, Card(Rank.SEVEN, Suit.CLUBS))
    with pytest.raises(RoundAlreadyTerminal):
        round_.submit_bid(1, PASS)


def test_all_pass_round_is_void():
    round_ = new_round(2, build_deck())
    for seat in (3, 0, 1, 2):
        round_.submit_bid(seat, PASS)

    assert round_.phase is RoundPhase.VOID
    assert round_.is_terminal()
    assert round_.outcome() is None
    assert round_.current_player is None


def test_custom_deal_pattern_changes_hands():
    rules = RuleSet(deal_pattern=[4, 4])
    round_ = new_round(0, build_deck(), rules)

    assert round_.hand(1)[:4] == build_deck()[:4]
    assert len(round_.hand(0)) == 8
