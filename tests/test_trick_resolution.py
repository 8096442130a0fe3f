from random import Random

import pytest

from coinche.cards import Card, Rank, Suit, card_sort_key
from coinche.deck import deal, shuffled_deck
from coinche.errors import TrickError
from coinche.state import PlayState
from coinche.trick import Trick


def full_trick(leader, *cards):
    trick = Trick(leader=leader)
    for offset, card in enumerate(cards):
        trick.add_play((leader + offset) % 4, card)
    return trick


def test_highest_lead_card_wins_without_trump():
    trick = full_trick(
        2,
        Card(Rank.KING, Suit.CLUBS),
        Card(Rank.TEN, Suit.CLUBS),
        Card(Rank.ACE, Suit.DIAMONDS),
        Card(Rank.SEVEN, Suit.CLUBS),
    )

    assert trick.winner(Suit.HEARTS) == 3
    assert trick.points(Suit.HEARTS) == 4 + 10 + 11


def test_lowest_trump_beats_lead_suit():
    trick = full_trick(
        0,
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.TEN, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
    )

    assert trick.winning_play(Suit.HEARTS) == (1, Card(Rank.SEVEN, Suit.HEARTS))


def test_trick_rejects_out_of_order_and_fifth_play():
    trick = Trick(leader=1)

    with pytest.raises(TrickError):
        trick.add_play(0, Card(Rank.SEVEN, Suit.CLUBS))

    for seat, rank in zip((1, 2, 3, 0), (Rank.SEVEN, Rank.EIGHT, Rank.NINE, Rank.JACK)):
        trick.add_play(seat, Card(rank, Suit.CLUBS))

    assert trick.is_full()
    assert trick.next_to_play() is None
    with pytest.raises(TrickError):
        trick.add_play(1, Card(Rank.ACE, Suit.CLUBS))


def test_empty_trick_has_no_winner():
    with pytest.raises(TrickError):
        Trick(leader=0).winner(Suit.HEARTS)


def test_winner_always_played_lead_suit_or_trump():
    rng = Random(21)
    for game in range(30):
        trump = list(Suit)[game % 4]
        state = PlayState(hands=deal(shuffled_deck(rng), dealer=game % 4), leader=(game + 1) % 4, trump=trump)
        while not state.is_finished():
            seat = state.current_player
            card = rng.choice(sorted(state.legal_plays(seat), key=card_sort_key))
            state.play_card(seat, card)

        assert len(state.tricks) == 8
        for trick in state.tricks:
            _, winning_card = trick.winning_play(trump)
            assert winning_card.suit in (trick.led_suit(), trump)
