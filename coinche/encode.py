"""Transport encoding for rounds.

A round is encoded as the deck it was dealt from plus the ordered list of
accepted actions. Decoding replays those actions through a fresh engine, so a
decoded round enforces exactly the same rules as the live one.
"""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .bidding import Bid, BidKind, Target
from .cards import Card, deserialize_card, deserialize_suit, serialize_card, serialize_suit
from .deck import DECK_SIZE
from .game import RoundEngine, new_round
from .rules_schema import RuleSet

SCHEMA_VERSION = 1

SuitName = Literal["clubs", "diamonds", "hearts", "spades"]
RankName = Literal["seven", "eight", "nine", "ten", "jack", "queen", "king", "ace"]


class CardModel(BaseModel):
    rank: RankName
    suit: SuitName

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(**serialize_card(card))

    def to_card(self) -> Card:
        return deserialize_card({"rank": self.rank, "suit": self.suit})


class BidModel(BaseModel):
    kind: Literal["contract", "pass", "double", "redouble"]
    suit: Optional[SuitName] = None
    target: Optional[str] = None

    @field_validator("target")
    @classmethod
    def validate_target(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return Target.parse(value).label()

    @model_validator(mode="after")
    def validate_shape(self) -> "BidModel":
        if self.kind == "contract" and self.target is None:
            raise ValueError("Contract bids need a target.")
        if self.kind != "contract" and (self.suit is not None or self.target is not None):
            raise ValueError(f"A {self.kind} carries no suit or target.")
        return self

    @classmethod
    def from_bid(cls, bid: Bid) -> "BidModel":
        return cls(
            kind=bid.kind.name.lower(),
            suit=serialize_suit(bid.suit),
            target=bid.target.label() if bid.target is not None else None,
        )

    def to_bid(self) -> Bid:
        target = Target.parse(self.target) if self.target is not None else None
        return Bid(BidKind[self.kind.upper()], deserialize_suit(self.suit), target)


class SeatBid(BaseModel):
    seat: int = Field(ge=0, le=3)
    bid: BidModel


class SeatPlay(BaseModel):
    seat: int = Field(ge=0, le=3)
    card: CardModel


class RoundSnapshot(BaseModel):
    version: int = SCHEMA_VERSION
    dealer: int = Field(ge=0, le=3)
    deck: List[CardModel]
    rules: RuleSet = Field(default_factory=RuleSet)
    bids: List[SeatBid] = Field(default_factory=list)
    plays: List[SeatPlay] = Field(default_factory=list)
    phase: Optional[str] = None

    @field_validator("deck")
    @classmethod
    def validate_deck_size(cls, value: List[CardModel]) -> List[CardModel]:
        if len(value) != DECK_SIZE:
            raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")
        return value


def snapshot_round(round_: RoundEngine) -> RoundSnapshot:
    assert round_.deck is not None
    plays: List[SeatPlay] = []
    if round_.state is not None:
        tricks = list(round_.state.tricks) + [round_.state.current_trick]
        for trick in tricks:
            plays.extend(SeatPlay(seat=seat, card=CardModel.from_card(card)) for seat, card in trick.plays)
    return RoundSnapshot(
        dealer=round_.dealer,
        deck=[CardModel.from_card(card) for card in round_.deck],
        rules=round_.rules,
        bids=[SeatBid(seat=seat, bid=BidModel.from_bid(bid)) for seat, bid in round_.auction.history],
        plays=plays,
        phase=round_.phase.name.lower(),
    )


def encode_round(round_: RoundEngine) -> dict[str, Any]:
    """Return a JSON-compatible payload describing the round."""
    return snapshot_round(round_).model_dump(mode="json")


def decode_round(payload: Mapping[str, Any]) -> RoundEngine:
    """Rebuild a round from ``encode_round`` output by replaying its actions."""
    snapshot = RoundSnapshot.model_validate(payload)
    round_ = new_round(snapshot.dealer, [card.to_card() for card in snapshot.deck], snapshot.rules)
    for entry in snapshot.bids:
        round_.submit_bid(entry.seat, entry.bid.to_bid())
    for entry in snapshot.plays:
        round_.submit_play(entry.seat, entry.card.to_card())
    return round_
