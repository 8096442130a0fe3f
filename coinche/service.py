"""Convenience service layer for hosting layers and UIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .bidding import Bid
from .cards import Card, Suit, card_label, card_sort_key, serialize_card, serialize_suit
from .encode import BidModel, CardModel
from .errors import NoActiveRound
from .game import GameSession, RoundEngine
from .seats import SEATS
from .trick import Trick


@dataclass
class TrickPlayView:
    player: int
    card: dict
    label: str


@dataclass
class TrickView:
    leader: int
    plays: list[TrickPlayView]
    winner: Optional[int]


@dataclass
class RoundView:
    phase: str
    dealer: int
    current_player: Optional[int]
    contract: Optional[dict]
    hand: list[dict]
    hand_labels: list[str]
    legal_plays: list[dict]
    legal_bids: list[dict]
    card_points: list[int]
    tricks_won: list[int]
    remaining_cards: list[int]
    trick: Optional[TrickView]
    trick_history: list[TrickView]
    auction_history: list[dict]
    belote_calls: list[dict]
    result: Optional[dict]


@dataclass
class SessionView:
    scores: list[int]
    status: str
    winning_team: Optional[int]
    dealer: int
    round: Optional[RoundView]


def _sorted_cards(cards) -> list[Card]:
    return sorted(cards, key=card_sort_key)


def _bid_sort_key(bid: Bid) -> tuple[int, int, int]:
    # No-trump sorts after the four suits at each level.
    target = bid.target.order if bid.target is not None else -1
    suit = bid.suit.value if bid.suit is not None else len(Suit) + 1
    return bid.kind.value, target, suit


def _bid_payload(bid: Bid) -> dict:
    return BidModel.from_bid(bid).model_dump()


class TableService:
    """Facade around GameSession for payload-driven consumers."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    # Session lifecycle -------------------------------------------------

    def start_new_round(self, deck: Optional[Sequence[Mapping[str, str]]] = None) -> RoundView:
        cards = [CardModel.model_validate(card).to_card() for card in deck] if deck is not None else None
        self.session.start_round(deck=cards)
        return self.get_round_view()

    def has_active_round(self) -> bool:
        return self.session.current_round is not None

    # Actions -----------------------------------------------------------

    def place_bid(self, player: int, payload: Mapping[str, object]) -> RoundView:
        bid = BidModel.model_validate(payload).to_bid()
        self.session.submit_bid(player, bid)
        return self.get_round_view(player)

    def play_card(self, player: int, card_payload: Mapping[str, str]) -> RoundView:
        card = CardModel.model_validate(card_payload).to_card()
        self.session.submit_play(player, card)
        return self.get_round_view(player)

    # Views -------------------------------------------------------------

    def get_session_view(self, perspective: int = 0) -> SessionView:
        state = self.session.game_state()
        round_view = self.get_round_view(perspective) if self._visible_round() is not None else None
        return SessionView(
            scores=list(state.team_scores),
            status=state.status.name.lower(),
            winning_team=state.winning_team,
            dealer=state.dealer,
            round=round_view,
        )

    def get_round_view(self, perspective: int = 0) -> RoundView:
        round_ = self._require_round()
        play = round_.state
        contract = round_.contract
        result = round_.outcome()

        trick_view: Optional[TrickView] = None
        trick_history: list[TrickView] = []
        card_points = [0, 0]
        tricks_won = [0, 0]
        belote_calls: list[dict] = []
        if play is not None:
            card_points = list(play.card_points)
            tricks_won = list(play.tricks_won)
            trick_history = [self._trick_view(trick, round_) for trick in play.tricks]
            if not play.current_trick.is_empty():
                trick_view = self._trick_view(play.current_trick, round_)
            belote_calls = [{"player": seat, "call": call} for seat, call in play.belote_calls]

        visible_hand = _sorted_cards(round_.hand(perspective))
        legal_plays = _sorted_cards(round_.legal_plays(perspective))
        legal_bids = sorted(round_.legal_bids(perspective), key=_bid_sort_key)

        return RoundView(
            phase=round_.phase.name.lower(),
            dealer=round_.dealer,
            current_player=round_.current_player,
            contract=(
                {
                    "bidder": contract.bidder,
                    "trump": serialize_suit(contract.trump),
                    "target": contract.target.label(),
                    "multiplier": contract.multiplier,
                    "label": contract.label(),
                }
                if contract is not None
                else None
            ),
            hand=[serialize_card(card) for card in visible_hand],
            hand_labels=[card_label(card) for card in visible_hand],
            legal_plays=[serialize_card(card) for card in legal_plays],
            legal_bids=[_bid_payload(bid) for bid in legal_bids],
            card_points=card_points,
            tricks_won=tricks_won,
            remaining_cards=[len(round_.hand(seat)) for seat in SEATS],
            trick=trick_view,
            trick_history=trick_history,
            auction_history=[
                {"player": seat, "bid": _bid_payload(bid), "label": bid.label()}
                for seat, bid in round_.auction.history
            ],
            belote_calls=belote_calls,
            result=(
                {
                    "outcome": result.outcome.name.lower(),
                    "scores": list(result.scores),
                    "card_points": list(result.card_points),
                    "belote_team": result.belote_team,
                }
                if result is not None
                else None
            ),
        )

    # Helpers -----------------------------------------------------------

    def _trick_view(self, trick: Trick, round_: RoundEngine) -> TrickView:
        trump = round_.contract.trump if round_.contract is not None else None
        return TrickView(
            leader=trick.leader,
            plays=[TrickPlayView(player=p, card=serialize_card(c), label=card_label(c)) for p, c in trick.plays],
            winner=trick.winner(trump) if trick.is_full() else None,
        )

    def _visible_round(self) -> Optional[RoundEngine]:
        return self.session.current_round or self.session.last_round

    def _require_round(self) -> RoundEngine:
        round_ = self._visible_round()
        if round_ is None:
            raise NoActiveRound("No round has been dealt.")
        return round_
