"""Card-related data structures and helpers for coinche."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping, Optional


class Suit(Enum):
    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()
    ACE = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Card point values outside the trump suit.
PLAIN_POINTS: dict[Rank, int] = {
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.JACK: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.TEN: 10,
    Rank.ACE: 11,
}

TRUMP_POINTS: dict[Rank, int] = {
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.TEN: 10,
    Rank.ACE: 11,
    Rank.NINE: 14,
    Rank.JACK: 20,
}

# Rank orders from lowest to highest for trick resolution.
PLAIN_ORDER: list[Rank] = [
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
    Rank.TEN,
    Rank.ACE,
]

TRUMP_ORDER: list[Rank] = [
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.QUEEN,
    Rank.KING,
    Rank.TEN,
    Rank.ACE,
    Rank.NINE,
    Rank.JACK,
]

PLAIN_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(PLAIN_ORDER)}
TRUMP_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(TRUMP_ORDER)}

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"


def rank_value(card: Card, is_trump: bool) -> int:
    """Return the points the card is worth in a trump or plain context."""
    table = TRUMP_POINTS if is_trump else PLAIN_POINTS
    return table[card.rank]


def card_points(card: Card, trump: Optional[Suit]) -> int:
    return rank_value(card, trump is not None and card.suit is trump)


def card_sort_key(card: Card) -> tuple[int, int]:
    """Suit-then-rank key for presenting cards in a stable order."""
    return card.suit.value, PLAIN_STRENGTH[card.rank]


def card_strength(card: Card, trump: Optional[Suit]) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    if trump is not None and card.suit is trump:
        return TRUMP_STRENGTH[card.rank]
    return PLAIN_STRENGTH[card.rank]


def beats(candidate: Card, current: Card, led_suit: Suit, trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        return card_strength(candidate, trump) > card_strength(current, trump)

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True

    return False


def compare(card_a: Card, card_b: Card, trump: Optional[Suit], lead_suit: Suit) -> Card:
    """Return the card that takes the trick between two plays.

    ``card_a`` is the earlier play and keeps the trick when ``card_b`` cannot
    beat it, including when neither card is a trump nor of the lead suit.
    """
    return card_b if beats(card_b, card_a, lead_suit, trump) else card_a


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    rank_name = payload["rank"].upper()
    suit_name = payload["suit"].upper()
    return Card(Rank[rank_name], Suit[suit_name])


def serialize_suit(suit: Optional[Suit]) -> Optional[str]:
    return suit.name.lower() if suit is not None else None


def deserialize_suit(name: Optional[str]) -> Optional[Suit]:
    return Suit[name.upper()] if name is not None else None


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
