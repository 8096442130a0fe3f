"""Bids, contracts and the four-player auction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Set, Tuple

from .cards import Suit
from .errors import (
    AuctionClosed,
    BidTooLow,
    IllegalBid,
    InvalidDouble,
    InvalidRedouble,
    NotYourTurn,
)
from .seats import NUM_SEATS, next_seat, other_team, team_of

logger = logging.getLogger(__name__)

PASSES_TO_CLOSE = NUM_SEATS - 1
PASSES_TO_VOID = NUM_SEATS


class Target(Enum):
    """Contract targets, in ascending order."""

    CONTRACT_80 = 80
    CONTRACT_90 = 90
    CONTRACT_100 = 100
    CONTRACT_110 = 110
    CONTRACT_120 = 120
    CONTRACT_130 = 130
    CONTRACT_140 = 140
    CONTRACT_150 = 150
    CONTRACT_160 = 160
    CAPOT = "capot"

    @property
    def is_capot(self) -> bool:
        return self is Target.CAPOT

    @property
    def order(self) -> int:
        return TARGET_ORDER.index(self)

    @property
    def points(self) -> Optional[int]:
        """Card points the taking team must reach, or None for capot."""
        return None if self.is_capot else self.value

    def label(self) -> str:
        return "Capot" if self.is_capot else str(self.value)

    @classmethod
    def parse(cls, text: str) -> "Target":
        normalized = str(text).strip().lower()
        for target in cls:
            if target.label().lower() == normalized:
                return target
        raise ValueError(f"Unknown contract target: {text!r}")


TARGET_ORDER: List[Target] = list(Target)


class BidKind(Enum):
    CONTRACT = auto()
    PASS = auto()
    DOUBLE = auto()
    REDOUBLE = auto()


@dataclass(frozen=True)
class Bid:
    """One auction action. Contract bids carry a trump (None for no-trump) and a target."""

    kind: BidKind
    suit: Optional[Suit] = None
    target: Optional[Target] = None

    def __post_init__(self) -> None:
        if self.kind is BidKind.CONTRACT and self.target is None:
            raise ValueError("Contract bids need a target.")
        if self.kind is not BidKind.CONTRACT and (self.suit is not None or self.target is not None):
            raise ValueError(f"{self.kind.name.title()} carries no suit or target.")

    @classmethod
    def contract(cls, suit: Optional[Suit], target: Target) -> "Bid":
        return cls(BidKind.CONTRACT, suit, target)

    @property
    def is_contract(self) -> bool:
        return self.kind is BidKind.CONTRACT

    def label(self) -> str:
        if not self.is_contract:
            return self.kind.name.lower()
        assert self.target is not None
        trump = str(self.suit) if self.suit is not None else "no trump"
        return f"{self.target.label()} {trump}"


PASS = Bid(BidKind.PASS)
DOUBLE = Bid(BidKind.DOUBLE)
REDOUBLE = Bid(BidKind.REDOUBLE)

MULTIPLIERS = {0: 1, 1: 2, 2: 4}


@dataclass(frozen=True)
class Contract:
    bidder: int
    trump: Optional[Suit]
    target: Target
    multiplier: int = 1
    doubled_by: Optional[int] = None
    redoubled_by: Optional[int] = None

    @property
    def taking_team(self) -> int:
        return team_of(self.bidder)

    @property
    def defending_team(self) -> int:
        return other_team(self.taking_team)

    @property
    def is_capot(self) -> bool:
        return self.target.is_capot

    def label(self) -> str:
        text = Bid.contract(self.trump, self.target).label()
        if self.multiplier == 2:
            text += " doubled"
        elif self.multiplier == 4:
            text += " redoubled"
        return text


class AuctionPhase(Enum):
    OPEN = auto()
    CLOSED = auto()
    VOID = auto()


@dataclass
class Auction:
    """Four-player auction; the seat left of the dealer speaks first."""

    dealer: int
    allow_no_trump: bool = True
    phase: AuctionPhase = field(init=False, default=AuctionPhase.OPEN)
    current_player: Optional[int] = field(init=False)
    highest_bidder: Optional[int] = field(init=False, default=None)
    highest_bid: Optional[Bid] = field(init=False, default=None)
    doubled_by: Optional[int] = field(init=False, default=None)
    redoubled_by: Optional[int] = field(init=False, default=None)
    consecutive_passes: int = field(init=False, default=0)
    history: List[Tuple[int, Bid]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.current_player = next_seat(self.dealer)

    # Actions -----------------------------------------------------------

    def submit(self, player: int, bid: Bid) -> AuctionPhase:
        """Validate and apply one auction action, returning the new phase."""
        self.validate(player, bid)

        if bid.kind is BidKind.CONTRACT:
            self.highest_bidder = player
            self.highest_bid = bid
            self.consecutive_passes = 0
        elif bid.kind is BidKind.DOUBLE:
            self.doubled_by = player
            self.consecutive_passes = 0
        elif bid.kind is BidKind.REDOUBLE:
            self.redoubled_by = player
            self.phase = AuctionPhase.CLOSED
        else:
            self.consecutive_passes += 1

        self.history.append((player, bid))
        logger.debug("Seat %d: %s", player, bid.label())

        if self.highest_bid is None and self.consecutive_passes >= PASSES_TO_VOID:
            self.phase = AuctionPhase.VOID
        elif self.highest_bid is not None and self.consecutive_passes >= PASSES_TO_CLOSE:
            self.phase = AuctionPhase.CLOSED

        if self.phase is AuctionPhase.OPEN:
            self.current_player = next_seat(player)
        else:
            self.current_player = None
            if self.phase is AuctionPhase.VOID:
                logger.info("Auction void: all four seats passed.")
            else:
                logger.info("Auction closed on %s by seat %d.", self.contract().label(), self.highest_bidder)
        return self.phase

    def bid(self, player: int, suit: Optional[Suit], target: Target) -> AuctionPhase:
        return self.submit(player, Bid.contract(suit, target))

    def pass_bid(self, player: int) -> AuctionPhase:
        return self.submit(player, PASS)

    def double(self, player: int) -> AuctionPhase:
        return self.submit(player, DOUBLE)

    def redouble(self, player: int) -> AuctionPhase:
        return self.submit(player, REDOUBLE)

    # Validation --------------------------------------------------------

    def validate(self, player: int, bid: Bid) -> None:
        """Raise the matching error if ``bid`` is not acceptable from ``player`` now."""
        if self.phase is not AuctionPhase.OPEN:
            raise AuctionClosed("Auction already complete.")
        if player != self.current_player:
            raise NotYourTurn(f"Seat {self.current_player} is due to speak, not seat {player}.")

        if bid.kind is BidKind.CONTRACT:
            self._validate_contract_bid(bid)
        elif bid.kind is BidKind.DOUBLE:
            self._validate_double(player)
        elif bid.kind is BidKind.REDOUBLE:
            self._validate_redouble(player)

    def _validate_contract_bid(self, bid: Bid) -> None:
        assert bid.target is not None
        if bid.suit is None and not self.allow_no_trump:
            raise IllegalBid("No-trump contracts are not allowed by these rules.")
        if self.doubled_by is not None:
            raise IllegalBid("No further contracts may be bid once the auction is doubled.")
        if self.highest_bid is not None:
            assert self.highest_bid.target is not None
            if bid.target.order <= self.highest_bid.target.order:
                raise BidTooLow(
                    f"Bid {bid.target.label()} must exceed the current {self.highest_bid.target.label()}."
                )

    def _validate_double(self, player: int) -> None:
        if self.highest_bidder is None:
            raise InvalidDouble("There is no contract to double.")
        if team_of(player) == team_of(self.highest_bidder):
            raise InvalidDouble("Only the defending team may double.")
        if self.doubled_by is not None:
            raise InvalidDouble("The contract is already doubled.")

    def _validate_redouble(self, player: int) -> None:
        if self.doubled_by is None:
            raise InvalidRedouble("Only a doubled contract can be redoubled.")
        assert self.highest_bidder is not None
        if team_of(player) != team_of(self.highest_bidder):
            raise InvalidRedouble("Only the taking team may redouble.")
        if self.redoubled_by is not None:
            raise InvalidRedouble("The contract is already redoubled.")

    # Queries -----------------------------------------------------------

    def candidate_bids(self) -> List[Bid]:
        suits: List[Optional[Suit]] = list(Suit)
        if self.allow_no_trump:
            suits.append(None)
        bids = [PASS, DOUBLE, REDOUBLE]
        bids.extend(Bid.contract(suit, target) for target in TARGET_ORDER for suit in suits)
        return bids

    def legal_bids(self, player: int) -> Set[Bid]:
        if self.phase is not AuctionPhase.OPEN or player != self.current_player:
            return set()
        legal: Set[Bid] = set()
        for bid in self.candidate_bids():
            try:
                self.validate(player, bid)
            except IllegalBid:
                continue
            legal.add(bid)
        return legal

    def is_complete(self) -> bool:
        return self.phase is AuctionPhase.CLOSED

    def is_void(self) -> bool:
        return self.phase is AuctionPhase.VOID

    def multiplier(self) -> int:
        level = int(self.doubled_by is not None) + int(self.redoubled_by is not None)
        return MULTIPLIERS[level]

    def contract(self) -> Contract:
        if self.highest_bid is None or self.highest_bidder is None:
            raise IllegalBid("No contract has been bid.")
        assert self.highest_bid.target is not None
        return Contract(
            bidder=self.highest_bidder,
            trump=self.highest_bid.suit,
            target=self.highest_bid.target,
            multiplier=self.multiplier(),
            doubled_by=self.doubled_by,
            redoubled_by=self.redoubled_by,
        )
