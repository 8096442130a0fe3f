import pytest
from pydantic import ValidationError

from coinche.deck import build_deck
from coinche.cards import serialize_card
from coinche.errors import InvalidDouble, NoActiveRound
from coinche.game import GameSession
from coinche.service import TableService


def ordered_service():
    service = TableService(GameSession(seed=1))
    service.start_new_round([serialize_card(card) for card in build_deck()])
    return service


def test_view_requires_a_round():
    with pytest.raises(NoActiveRound):
        TableService().get_round_view()


def test_bidding_view_exposes_legal_bids_only_to_speaker():
    service = ordered_service()

    view = service.get_round_view(1)
    assert view.phase == "bidding"
    assert view.current_player == 1
    assert view.legal_bids[0] == {"kind": "contract", "suit": "clubs", "target": "80"}
    assert {"kind": "pass", "suit": None, "target": None} in view.legal_bids
    assert service.get_round_view(2).legal_bids == []
    assert view.hand_labels[0] == "Seven of Clubs"
    assert view.remaining_cards == [8, 8, 8, 8]


def test_place_bid_and_play_card():
    service = ordered_service()
    service.place_bid(1, {"kind": "contract", "suit": "hearts", "target": "80"})
    for seat in (2, 3, 0):
        service.place_bid(seat, {"kind": "pass"})

    view = service.play_card(1, {"rank": "seven", "suit": "clubs"})

    assert view.phase == "play"
    assert view.contract["label"] == "80 hearts"
    assert view.contract["multiplier"] == 1
    assert view.trick.leader == 1
    assert view.trick.plays[0].label == "Seven of Clubs"
    assert view.trick.winner is None
    assert [entry["label"] for entry in view.auction_history] == ["80 hearts", "pass", "pass", "pass"]
    assert view.remaining_cards == [8, 7, 8, 8]

    speaker_view = service.get_round_view(2)
    assert speaker_view.legal_plays == [
        {"rank": "jack", "suit": "clubs"},
        {"rank": "queen", "suit": "clubs"},
        {"rank": "king", "suit": "clubs"},
    ]


def test_invalid_payloads_are_rejected():
    service = ordered_service()

    bad_bids = [
        {"kind": "shout"},
        {"kind": "contract"},
        {"kind": "contract", "suit": "hearts", "target": "85"},
        {"kind": "contract", "suit": "stars", "target": "80"},
        {"kind": "pass", "suit": "hearts"},
    ]
    for payload in bad_bids:
        with pytest.raises(ValidationError):
            service.place_bid(1, payload)
    assert service.get_round_view(1).auction_history == []

    service.place_bid(1, {"kind": "contract", "suit": "hearts", "target": "capot"})
    for seat in (2, 3, 0):
        service.place_bid(seat, {"kind": "pass"})
    with pytest.raises(ValidationError):
        service.play_card(1, {"rank": "joker", "suit": "clubs"})
    with pytest.raises(ValidationError):
        service.play_card(1, {"rank": "seven"})
    assert service.get_round_view(1).remaining_cards == [8, 8, 8, 8]


def test_double_without_contract_is_rejected():
    service = ordered_service()

    with pytest.raises(InvalidDouble):
        service.place_bid(1, {"kind": "double"})


def test_session_view_keeps_last_round_after_void():
    service = ordered_service()
    for seat in (1, 2, 3, 0):
        service.place_bid(seat, {"kind": "pass"})

    view = service.get_session_view()
    assert not service.has_active_round()
    assert view.status == "in_progress"
    assert view.scores == [0, 0]
    assert view.dealer == 1
    assert view.round.phase == "void"
    assert view.round.result is None
